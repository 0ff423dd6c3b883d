"""Screen panel configurator with a live 3D preview and CSV parameter export."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("screenconfigurator")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
