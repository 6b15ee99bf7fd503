# sitewright/api/generation.py
"""
Public API for the generation components.

This module provides functions to access the pipeline services with lazy
initialization through the service registry.
"""
from sitewright.core.registry import registry

from sitewright.generation.builder import ProjectBuilder
from sitewright.generation.facade import GenerationFacade
from sitewright.generation.parser import OutputParser
from sitewright.generation.scaffolder import ProjectScaffolder
from sitewright.generation.writer import OutputWriter


def get_output_parser() -> OutputParser:
    """Get the output parser instance."""
    from sitewright.generation.parser import output_parser
    registry.register_factory("output_parser", lambda: output_parser)
    return registry.get_or_create("output_parser", OutputParser)


def get_output_writer() -> OutputWriter:
    """Get the output writer bound to the configured root."""
    return registry.get_or_create("output_writer", OutputWriter)


def get_project_scaffolder() -> ProjectScaffolder:
    """Get the project scaffolder instance."""
    return registry.get_or_create("project_scaffolder", ProjectScaffolder)


def get_project_builder() -> ProjectBuilder:
    """Get the project builder instance."""
    return registry.get_or_create("project_builder", ProjectBuilder)


def get_generation_facade() -> GenerationFacade:
    """Get the generation facade, wired to the shared scaffolder and builder."""
    registry.register_factory(
        "generation_facade",
        lambda: GenerationFacade(
            scaffolder=get_project_scaffolder(),
            builder=get_project_builder(),
        ),
    )
    return registry.get_or_create("generation_facade", GenerationFacade)


__all__ = [
    'get_output_parser',
    'get_output_writer',
    'get_project_scaffolder',
    'get_project_builder',
    'get_generation_facade',
]
