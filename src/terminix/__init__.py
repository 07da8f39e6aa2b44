"""Command line parameter handling for the Terminix terminal emulator."""

from .geometry import Geometry, parse_geometry
from .options import MappingOptionSource, NamespaceOptionSource, OptionSource
from .params import CommandParameters, build_command_parameters

__all__ = [
    "build_command_parameters",
    "CommandParameters",
    "Geometry",
    "MappingOptionSource",
    "NamespaceOptionSource",
    "OptionSource",
    "parse_geometry",
]
