from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from composer.core.context import ChainContext
from composer.foundation.logging_utils import close_operational_logger, setup_operational_logger
from composer.framework.config import ComposerConfig, load_composer_config


def utc_now_iso8601() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def generate_run_id() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{timestamp}_{uuid.uuid4()}"


@dataclass
class ChainRun:
    run_id: str
    cfg: ComposerConfig
    logger: logging.Logger
    context: ChainContext
    created_at: str
    log_file: str | None = None

    def close(self) -> None:
        close_operational_logger(self.logger)


def start_chain_run(
    cfg: ComposerConfig | None = None,
    *,
    run_id: str | None = None,
    context_factory: type[ChainContext] = ChainContext,
) -> ChainRun:
    """
    Prepare a fresh, empty context and operational logger for one chain run.

    Without `cfg`, settings come from `load_composer_config()`. `context_factory`
    lets applications supply their own `ChainContext` subclass; it must hand back
    an empty context.
    """

    if cfg is None:
        cfg, warnings, source = load_composer_config()
    else:
        warnings, source = [], None

    effective_id = run_id or generate_run_id()
    settings = cfg.logging
    logger, log_file = setup_operational_logger(
        effective_id,
        logger_name=settings.logger_name,
        level=settings.level,
        file_level=settings.file_level,
        log_dir=settings.log_dir,
        fmt=settings.format,
    )

    try:
        context = context_factory(logger=logger)
        if len(context):
            raise ValueError(
                f"Context factory {context_factory.__name__} produced a non-empty context "
                f"(keys: {', '.join(context.keys())})"
            )
    except Exception:
        close_operational_logger(logger)
        raise

    if source is not None:
        logger.info("Loaded settings from %s", source)
    for warning in warnings:
        logger.warning("Config warning: %s", warning)

    return ChainRun(
        run_id=effective_id,
        cfg=cfg,
        logger=logger,
        context=context,
        created_at=utc_now_iso8601(),
        log_file=log_file,
    )
