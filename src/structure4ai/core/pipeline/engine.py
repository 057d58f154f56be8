from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates one complete run:
1. Resolves every requested format (unknown names fail before walking).
2. Walks the root into a StructureModel.
3. Renders each distinct output file in parallel threads.
4. Writes the rendered documents once every renderer has finished.
5. Aggregates per-format outcomes into a PipelineResult.

A failing format is logged and recorded; it never prevents the others
from being written.
"""

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Tuple

from structure4ai.core.analysis.ignore_policy import IgnorePolicy
from structure4ai.core.analysis.tree_walker import TreeWalker, WalkObserver
from structure4ai.core.generators.base import OutputGenerator
from structure4ai.core.generators.registry import GeneratorRegistry
from structure4ai.core.pipeline.writer import write_output_document
from structure4ai.domain.config import AppConfig
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.pipeline_models import PipelineResult, create_result
from structure4ai.domain.tree_models import StructureModel
from structure4ai.infra.fs import normalize_path, resolve_output_target, safe_mkdir

logger = logging.getLogger(__name__)

MAX_WORKERS = 4


def run_pipeline(
        root_path: Optional[str],
        config: Optional[AppConfig] = None,
        *,
        output_path: Optional[str] = None,
        observer: Optional[WalkObserver] = None,
        delay_ms: int = 0,
        registry: Optional[GeneratorRegistry] = None,
) -> PipelineResult:
    """
    Walk `root_path` and write one file per requested format.

    Args:
        root_path: Directory to document; the working directory when empty.
        config: Configuration snapshot; defaults when omitted.
        output_path: Output file path; its stem names every generated file.
            Relative paths are anchored at the root. Defaults to
            `general.default_output_path`.
        observer: Progress observer passed to the walker.
        delay_ms: Per-entry delay for animated output.
        registry: Generator registry; the built-in one when omitted.

    Returns:
        PipelineResult: Counters plus generated and failed formats.

    Raises:
        UnsupportedFormatError: If a requested format is unknown.
        RootPathError: If the root cannot be walked.
    """
    started = time.perf_counter()
    cfg = config or AppConfig()
    registry = registry or GeneratorRegistry.with_defaults(cfg)
    root = normalize_path(root_path, os.getcwd())

    # 1. Resolve formats up front
    generators: List[Tuple[str, OutputGenerator]] = [
        (fmt, registry.create(fmt)) for fmt in cfg.output.formats
    ]

    output_dir, base_name = resolve_output_target(
        output_path or cfg.general.default_output_path, root
    )

    # 2. Walk
    walker = TreeWalker(
        IgnorePolicy.from_config(cfg),
        max_depth=cfg.general.max_depth,
        compute_sizes=cfg.statistics.calculate_file_size,
        observer=observer,
        delay_ms=delay_ms,
    )
    model = walker.walk(root)

    # 3. Generate and write
    generated, failed = _generate_outputs(model, root, output_dir, base_name, generators)

    elapsed = time.perf_counter() - started
    logger.info(f"Pipeline finished in {elapsed:.2f}s: {len(generated)} written, {len(failed)} failed")

    return create_result(
        model,
        output_dir,
        base_name,
        generated,
        failed,
        summary_extra={
            "formats": list(cfg.output.formats),
            "total_expected": model.total_expected,
            "elapsed_seconds": round(elapsed, 3),
        },
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_all(
        model: StructureModel,
        root: str,
        tasks: Dict[str, OutputGenerator],
) -> Tuple[Dict[str, OutputDocument], Dict[str, str]]:
    """Render every task in parallel; nothing is written yet."""
    rendered: Dict[str, OutputDocument] = {}
    errors: Dict[str, str] = {}

    workers = max(1, min(MAX_WORKERS, len(tasks)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="GeneratorWorker") as executor:
        futures: Dict[Future, str] = {
            executor.submit(gen.generate, model, root): path
            for path, gen in tasks.items()
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                rendered[path] = future.result()
            except Exception as e:
                logger.error(f"Failed to render '{path}': {e}", exc_info=True)
                errors[path] = str(e) or e.__class__.__name__

    return rendered, errors


def _generate_outputs(
        model: StructureModel,
        root: str,
        output_dir: str,
        base_name: str,
        generators: List[Tuple[str, OutputGenerator]],
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Render each distinct output path once and map results back to formats.

    Aliases that resolve to the same file (e.g. `md` and `markdown`) share
    a single task. Files are written in request order, only after every
    renderer has finished, so generators that read the project tree never
    see this run's output.
    """
    generated: Dict[str, str] = {}
    failed: Dict[str, str] = {}

    ok, err = safe_mkdir(output_dir)
    if not ok:
        logger.error(f"Cannot create output directory '{output_dir}': {err}")
        for fmt, _ in generators:
            failed[fmt] = f"Cannot create output directory: {err}"
        return generated, failed

    path_by_format: Dict[str, str] = {}
    tasks: Dict[str, OutputGenerator] = {}
    for fmt, generator in generators:
        path = os.path.join(output_dir, f"{base_name}.{generator.file_extension()}")
        path_by_format[fmt] = path
        if path not in tasks:
            generator.exclude_output_target(output_dir, base_name)
            tasks[path] = generator

    # 1. Render
    rendered, errors = _render_all(model, root, tasks)

    # 2. Write
    written: Dict[str, str] = {}
    for path in tasks:
        if path not in rendered:
            continue
        try:
            written[path] = write_output_document(path, rendered[path])
        except OSError as e:
            logger.error(f"Failed to write '{path}': {e}")
            errors[path] = str(e) or e.__class__.__name__

    for fmt, path in path_by_format.items():
        if path in written:
            generated[fmt] = written[path]
        else:
            failed[fmt] = errors[path]

    return generated, failed
