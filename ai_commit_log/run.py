from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from ai_commit_log import __version__
from ai_commit_log.config import Settings, load_settings, resolve_provider
from ai_commit_log.errors import CommitLogError
from ai_commit_log.formatter import format_commit_message, subject_prefix
from ai_commit_log.llm import LLMClient, build_llm
from ai_commit_log.schema import build_request, extract_commit_message
from ai_commit_log.utils.io import read_patch

EXIT_INTERRUPTED = 130

err_console = Console(stderr=True)
logger = logging.getLogger("ai_commit_log")


def _error(message: str) -> None:
    # Provider text may contain brackets; print it exactly as received.
    err_console.print(f"Error: {message}", markup=False, highlight=False, emoji=False, soft_wrap=True)


def _setup_logging(level: str) -> None:
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.propagate = False
    numeric = logging.getLevelName(level)
    logger.setLevel(numeric if isinstance(numeric, int) else logging.WARNING)


def generate(patch_stream, settings: Settings) -> str:
    """Patch in, formatted commit message out. Raises CommitLogError on any failure."""
    patch = read_patch(patch_stream)
    provider_cfg = resolve_provider(settings)
    request = build_request(patch, provider_cfg, settings)

    llm: LLMClient = build_llm(settings, provider_cfg)
    body = llm.post(request)
    message = format_commit_message(extract_commit_message(body))

    subject = message.split("\n", 1)[0]
    if subject_prefix(subject) is None:
        logger.warning("Subject has no feature/fix/refactor/chore prefix: %s", subject)
    return message


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ai-commit-log",
        description="Generate a formatted Git commit message from a patch read on stdin.",
    )
    parser.add_argument("--provider", type=str, default=None, help="openai | togetherai (overrides AI_PROVIDER)")
    parser.add_argument("--model", type=str, default=None, help="model for the selected provider")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    try:
        settings = load_settings().with_overrides(provider=args.provider, model=args.model)
        _setup_logging("DEBUG" if args.verbose else settings.log_level)
        message = generate(sys.stdin, settings)
    except CommitLogError as exc:
        _error(exc.message)
        if exc.raw is not None:
            err_console.print(f"Raw response: {exc.raw}", markup=False, highlight=False, emoji=False, soft_wrap=True)
        return exc.exit_code
    except KeyboardInterrupt:
        _error("Interrupted.")
        return EXIT_INTERRUPTED

    sys.stdout.write(message + "\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
