"""
Command-line entry point: run one generation request and print the result as JSON
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from core.exceptions import GenerationError, InvalidPromptError, LLMError
from core.logging_config import configure_logging
from core.startup import cleanup_pipeline, initialize_pipeline
from domain.brand.types import Project, Theme
from domain.rag.retrieval.types import Document
from storage.memory_store import InMemoryContentStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Brand-aware content generation pipeline")
    parser.add_argument("--prompt", required=True, help="What to generate")
    parser.add_argument("--theme", required=True, help="Path to a theme JSON file (name, tags, inspirations)")
    parser.add_argument(
        "--project", required=True, help="Path to a project JSON file (name, description, goals, customer_type)"
    )
    parser.add_argument("--variants", type=int, default=None, help="Number of variants (default from settings)")
    parser.add_argument("--media-type", choices=["text", "image"], default="text", help="Kind of content")
    parser.add_argument(
        "--history",
        default="",
        help="Optional JSON file with prior project content: a list of {id, text} objects",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def load_json(path: str) -> Any:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def load_history(path: str, project_id: str) -> InMemoryContentStore:
    store = InMemoryContentStore()
    if not path:
        return store
    for item in load_json(path):
        store.add_document(project_id, Document.model_validate(item))
    return store


async def run(args: argparse.Namespace) -> int:
    theme = Theme.model_validate(load_json(args.theme))
    project = Project.model_validate(load_json(args.project))
    project_id = project.id or "cli-project"
    project = project.model_copy(update={"id": project_id})

    try:
        components = initialize_pipeline(content_store=load_history(args.history, project_id))
    except LLMError as e:
        logger.error(f"Failed to initialize LLM client: {e}")
        return 2

    try:
        result = await components.pipeline.execute({
            "prompt": args.prompt,
            "theme": theme,
            "project": project,
            "variantCount": args.variants,
            "mediaType": args.media_type,
        })
    except InvalidPromptError as e:
        logger.error(f"Invalid request: {e}")
        return 2
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        return 1
    finally:
        await cleanup_pipeline(components)

    print(result.model_dump_json(indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
