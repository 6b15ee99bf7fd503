# sitewright/generation/__init__.py
"""
Materialization pipeline: parse model output, write it to disk, scaffold and
build framework projects.
"""
from .errors import GenerationError, ValidationError, UnsupportedKindError
from .models import (
    OutputKind,
    ParsedFileSet,
    OutputDirectory,
    BuildState,
    BuildStep,
    BuildOutcome,
    GenerationResult,
)
from .parser import parse_output, extract_fenced_block, OutputParser
from .writer import write_file_set, resolve_output_directory, OutputWriter
from .scaffolder import ProjectScaffolder
from .builder import ProjectBuilder
from .facade import GenerationFacade, StreamSession
from .archive import package_output_directory, cleanup_expired_archives

__all__ = [
    'GenerationError',
    'ValidationError',
    'UnsupportedKindError',
    'OutputKind',
    'ParsedFileSet',
    'OutputDirectory',
    'BuildState',
    'BuildStep',
    'BuildOutcome',
    'GenerationResult',
    'parse_output',
    'extract_fenced_block',
    'OutputParser',
    'write_file_set',
    'resolve_output_directory',
    'OutputWriter',
    'ProjectScaffolder',
    'ProjectBuilder',
    'GenerationFacade',
    'StreamSession',
    'package_output_directory',
    'cleanup_expired_archives',
]
