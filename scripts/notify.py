#!/usr/bin/env python3
"""Send one Slack notification for a Cloud Build event.

Usage::

    # Event JSON as published on the cloud-builds Pub/Sub topic
    python scripts/notify.py --event build.json

    # Custom config and template
    python scripts/notify.py --config config/notifier.yaml \
        --template templates/slack.json.j2 --event build.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog

from src.core.config import load_settings
from src.core.logging import setup_logging
from src.core.types import BuildEvent
from src.notifier.exceptions import NotifierError
from src.notifier.factory import create_notifier, read_template
from src.notifier.secrets import EnvSecretGetter

logger = structlog.get_logger(__name__)


async def run(args: argparse.Namespace) -> int:
    """Set up the notifier and deliver a single event."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    try:
        payload = json.loads(Path(args.event).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("event_load_failed", path=args.event, error=str(exc))
        return 1
    event = BuildEvent.from_cloud_build(payload)

    try:
        template_text = read_template(args.template) if args.template else None
        notifier = create_notifier(settings, EnvSecretGetter(), template_text)
    except NotifierError as exc:
        logger.error("notifier_setup_failed", stage=exc.stage, error=str(exc))
        return 1

    try:
        sent = await notifier.notify(event)
    except NotifierError as exc:
        logger.error(
            "notification_failed",
            build_id=event.id,
            stage=exc.stage,
            error=str(exc),
        )
        return 1
    finally:
        await notifier.close()

    logger.info("notification_done", build_id=event.id, sent=sent)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Send a Slack notification for a Cloud Build event.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to notifier YAML (default: config/notifier.yaml)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Template path override (default: spec.notification.template.uri)",
    )
    parser.add_argument(
        "--event",
        required=True,
        help="Path to a Cloud Build event JSON file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
