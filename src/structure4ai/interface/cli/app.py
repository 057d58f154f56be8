from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading and
validation, pipeline execution and result rendering.

Exit codes: 0 every format written, 1 at least one format failed,
2 invalid root / unsupported format / configuration error, 130 interrupted.
"""

import json
import sys
from typing import List, Optional

from structure4ai.core.pipeline.engine import run_pipeline
from structure4ai.core.pipeline.validator import validate_config
from structure4ai.domain.config import (
    config_to_dict,
    default_config_path,
    load_config_dict,
    save_config,
)
from structure4ai.domain.errors import ConfigError, RootPathError, UnsupportedFormatError
from structure4ai.domain.pipeline_models import PipelineResult
from structure4ai.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from structure4ai.interface.cli import args as cli_args
from structure4ai.interface.cli.progress import ConsoleProgressObserver
from structure4ai.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap: warnings to stderr, full detail to the log file
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=get_default_log_path()))

    # 3. Configuration
    try:
        raw_conf = load_config_dict(args.config_file)
        config, _warnings = validate_config(raw_conf)
    except ConfigError as e:
        _error(i18n.t("cli.errors.config", error=str(e)))
        return EXIT_USAGE

    if args.dump_config:
        print(json.dumps(config_to_dict(config), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        target = default_config_path()
        if not save_config(config, target):
            _error(i18n.t("cli.errors.save", path=target))
            return EXIT_USAGE
        print(i18n.t("cli.status.saved", path=target))
        return EXIT_OK

    # 4. Pipeline execution phase
    animate = config.general.show_console_animation and not args.no_animation
    observer = ConsoleProgressObserver() if animate else None
    delay_ms = config.general.animation_delay_ms if animate else 0

    if not animate:
        print(i18n.t("cli.status.walking", path=args.path or "."))

    try:
        result = run_pipeline(
            args.path,
            config,
            output_path=args.output,
            observer=observer,
            delay_ms=delay_ms,
        )
    except RootPathError as e:
        _error(i18n.t("cli.errors.root", error=str(e)))
        return EXIT_USAGE
    except UnsupportedFormatError as e:
        _error(i18n.t("cli.errors.format", error=str(e)))
        return EXIT_USAGE
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED

    # 5. Output rendering phase
    _print_human_summary(result, include_counts=not animate)
    return EXIT_OK if result.ok else EXIT_PARTIAL

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _error(message: str) -> None:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)


def _print_human_summary(result: PipelineResult, include_counts: bool = True) -> None:
    """
    Print the outcome of a run to standard output.

    The animated observer already prints the counters, so they are only
    repeated for silent runs.
    """
    print(i18n.t("cli.status.success" if result.ok else "cli.status.partial"))

    if include_counts:
        print(i18n.t(
            "cli.status.summary",
            folders=result.folder_count,
            files=result.file_count,
            errors=result.error_count,
            processed=result.processed_count,
        ))

    if result.generated_files:
        print(i18n.t("cli.status.generated"))
        for fmt, path in result.generated_files.items():
            print(f"  - {fmt}: {path}")

    if result.failed_formats:
        print(i18n.t("cli.status.failed"), file=sys.stderr)
        for fmt, msg in result.failed_formats.items():
            print(f"  - {fmt}: {msg}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
