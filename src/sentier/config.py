"""Pipeline configuration.

PipelineConfig is a frozen dataclass, fixed once the Pipeline is built.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Pipeline configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PipelineConfig(thread_payload=False, template_dir="templates")
    """

    # Argument passing: when False, middleware, pre-handlers and the route
    # handler are called without arguments.
    thread_payload: bool = True

    # Logging of failures caught by the pipeline
    log_errors: bool = True

    # Views
    template_dir: str | Path = "views"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Development
    debug: bool = False
