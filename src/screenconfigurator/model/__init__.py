"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the widgets or the Visualization (PyVista); the
parameter store only relies on QtCore signals for change notification.
It deals with the panel parameters, the hole layout and CSV export.
"""
