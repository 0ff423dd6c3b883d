"""
The VIEW layer holds the Qt widgets and the PyVista preview.
It reads from and writes to the ParameterStore; it never computes geometry.
"""
