"""Main entry point for the TODO agent."""

import argparse
import logging
import os
import sys
import time
from typing import Callable, List, Optional

from dotenv import find_dotenv, load_dotenv

from .collector import LineCollector
from .config import AppConfig, load_config
from .enricher import enrich
from .exceptions import ConfigError, DeliveryError
from .llm_client import LLMClient
from .mailgun_sender import MailgunSender, deliver_with_retry
from .models import OutboundMessage, TodoItem
from .openai_client import create_llm_client

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

USAGE_EXAMPLES = """\
> Further details.
>
SENT!

examples:
$ todo need to do something
$ todo "I've to do something"
"""


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        usage="todo [ITEM]",
        description="Capture a TODO at the terminal and email it to your inbox.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "item",
        # Everything after the first word belongs to the TODO, dashes included.
        nargs=argparse.REMAINDER,
        help="Words of the TODO; joined with spaces to form the subject"
    )
    return parser


def run_todo(
    text: str,
    config: AppConfig,
    collector: LineCollector,
    sender: MailgunSender,
    llm_client: Optional[LLMClient] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Collect, enrich and deliver one TODO.

    Args:
        text: The TODO summary (command-line words, space-joined).
        config: Application configuration.
        collector: Source of the detail lines.
        sender: Mailgun sender.
        llm_client: Completion client, or None to skip suggestions.
        sleep: Sleep function used between delivery attempts.

    Returns:
        The process exit code.
    """
    item = TodoItem(text=text)

    lines, completed = collector.collect()
    if not completed:
        logger.info("TODO is canceled.")
        return EXIT_OK
    item.lines.extend(lines)

    body = item.body
    if llm_client is not None:
        body = enrich(body, llm_client, config.llm)

    message = OutboundMessage(
        subject=item.subject,
        body=body,
        recipient=config.mailgun.inbox,
    )

    try:
        attempts = deliver_with_retry(
            sender,
            message,
            backoff_seconds=config.delivery.backoff_seconds,
            max_attempts=config.delivery.max_attempts,
            sleep=sleep,
        )
    except DeliveryError as e:
        logger.error(f"TODO was not sent: {e}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.error("delivery aborted, TODO was not sent.")
        return EXIT_INTERRUPTED

    logger.debug(f"Delivered after {attempts} attempt(s)")
    logger.info("SENT!")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command-line argument parsing."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # LOG_LEVEL may come from .env, so load it before logging is configured.
    load_dotenv(find_dotenv(usecwd=True))
    _configure_logging()

    text = " ".join(args.item)
    if not text:
        logger.error("missing todo subject.")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Fatal configuration error: {e}")
        return EXIT_FAILURE

    llm_client = None
    if config.llm is not None:
        llm_client = create_llm_client(config.llm)

    sender = MailgunSender(config.mailgun, timeout=config.delivery.timeout_seconds)
    return run_todo(text, config, LineCollector(), sender, llm_client)


if __name__ == "__main__":
    sys.exit(main())
