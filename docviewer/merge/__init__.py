"""Merge engine: directive processing, structural repair, and list unions."""

from .definitions import merge_definition_lists
from .directives import DirectiveProcessor
from .structure import SectionRegistry, StructureEnsurer

__all__ = [
    "DirectiveProcessor",
    "SectionRegistry",
    "StructureEnsurer",
    "merge_definition_lists",
]
