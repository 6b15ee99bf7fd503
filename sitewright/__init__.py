# sitewright/__init__.py
"""
sitewright: materializes model-generated web apps into runnable projects on disk.
"""

__version__ = '0.1.0'


def init_application():
    """Register the pipeline services with the registry."""
    from sitewright.core.registry import registry
    from sitewright.api.generation import (
        get_output_parser,
        get_output_writer,
        get_project_scaffolder,
        get_project_builder,
        get_generation_facade,
    )

    get_output_parser()
    get_output_writer()
    get_project_scaffolder()
    get_project_builder()
    get_generation_facade()

    from sitewright.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.debug(f"Application initialization completed: {', '.join(registry.get_initialization_order())}")
