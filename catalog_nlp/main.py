import argparse
import logging
import sys

from catalog_nlp.core.config import settings
from catalog_nlp.pipelines.run_analysis_pipeline import run
from catalog_nlp.utils.exceptions import PipelineError
from catalog_nlp.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-nlp",
        description="Text mining of catalog metadata: word pairs, tf-idf, LDA topics.",
    )
    parser.add_argument("--data", type=str, help="Path to the metadata JSON file")
    parser.add_argument("--config", type=str, help="Pipeline steps YAML file")
    parser.add_argument("--report-dir", type=str, help="Where charts/tables go")
    parser.add_argument("--topics", type=int, help="Number of LDA topics")
    parser.add_argument(
        "--backend", choices=["sklearn", "gensim"], help="LDA implementation"
    )
    parser.add_argument("--seed", type=int, help="Random state for LDA")
    parser.add_argument(
        "--no-export", action="store_true", help="Do not write charts or tables"
    )
    parser.add_argument("--log-level", type=str, help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        "DATA_PATH": args.data,
        "PIPELINE_CONFIG": args.config,
        "REPORT_DIR": args.report_dir,
        "NUM_TOPICS": args.topics,
        "TOPIC_BACKEND": args.backend,
        "RANDOM_STATE": args.seed,
        "LOG_LEVEL": args.log_level,
    }
    cfg = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    setup_logging(level=cfg.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    try:
        run(cfg=cfg, export=not args.no_export)
    except PipelineError as e:
        logger.error(f"❌ {e.code}: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
