"""
Creator Curation Pipeline - Command Line Entry
Bind a channel, browse a month of uploads, curate and submit.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

from curation_pipeline.core.binding import ChannelBindingStore
from curation_pipeline.core.config import AppConfig, ConfigLoader, ConfigValidationError
from curation_pipeline.core.notifications import NotificationKind
from curation_pipeline.core.selection import SelectionState
from curation_pipeline.core.session import CurationSession, UserIdentity
from curation_pipeline.core.storage import JsonFileBindingStorage, StorageManager
from curation_pipeline.core.submission import SubmissionPipeline, SubmissionSink, build_sink
from curation_pipeline.core.youtube import (
    ChannelIdentifierResolver,
    VideoCatalogFetcher,
    YouTubeClient,
)

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"
EMAIL_ENV = "CREATOR_EMAIL"

logger = logging.getLogger(__name__)


def setup_logging(logs_dir: Path, level: str = "INFO"):
    """Configure logging with file and console handlers."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "curation_pipeline.log"

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
    return logging.getLogger(__name__)


def load_configuration(config_path: Path) -> AppConfig:
    """Load and validate application configuration. Exits on failure."""
    try:
        return ConfigLoader(config_path).load()
    except FileNotFoundError as e:
        print(f"Configuration file not found: {e}", file=sys.stderr)
        sys.exit(1)
    except ConfigValidationError as e:
        print(f"Configuration validation failed: {e}", file=sys.stderr)
        sys.exit(1)


def build_session(
    config: AppConfig,
    identity: UserIdentity,
    storage: StorageManager,
    youtube_client: Optional[YouTubeClient] = None,
    sink: Optional[SubmissionSink] = None
) -> CurationSession:
    """Wires a CurationSession from configuration."""
    client = youtube_client or YouTubeClient(config.api_key)
    tz = ZoneInfo(config.timezone) if config.timezone else None

    binding_store = ChannelBindingStore(
        JsonFileBindingStorage(storage.bindings_file),
        identity.user_key,
        max_changes=config.max_channel_changes
    )

    return CurationSession(
        identity=identity,
        binding_store=binding_store,
        resolver=ChannelIdentifierResolver(client),
        catalog=VideoCatalogFetcher(client, max_results=config.max_results, tz=tz),
        pipeline=SubmissionPipeline(sink or build_sink(config, storage.sheets_path)),
        selection=SelectionState()
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Creator Curation Pipeline")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="Path to config.yaml")
    parser.add_argument("--email", type=str, default=os.environ.get(EMAIL_ENV, ""),
                        help=f"Signed-in creator email (default: ${EMAIL_ENV})")
    parser.add_argument("--name", type=str, default="", help="Creator display name")

    sub = parser.add_subparsers(dest="command", required=True)

    bind = sub.add_parser("bind", help="Link a YouTube channel (ID, channel link or @handle)")
    bind.add_argument("channel", type=str)

    sub.add_parser("status", help="Show the linked channel")

    videos = sub.add_parser("videos", help="List a month of uploads")
    _add_month_args(videos)

    submit = sub.add_parser("submit", help="Submit selected uploads of a month")
    _add_month_args(submit)
    submit.add_argument("--select", nargs="+", required=True, metavar="VIDEO_ID")
    submit.add_argument("--format", nargs="*", default=[], metavar="VIDEO_ID=FORMAT",
                        help="Format tag per video: VIDEO, SHORTS or LIVE")
    return parser


def _add_month_args(parser: argparse.ArgumentParser):
    parser.add_argument("--month", type=int, choices=range(1, 13), default=None,
                        help="Calendar month 1-12 (default: current month)")
    parser.add_argument("--year", type=int, default=None, help="Year (default: current year)")


def _report(session: CurationSession) -> int:
    """Prints the open notification. Returns the exit status."""
    state = session.notifications.state
    if not state.is_open:
        return 0

    icons = {NotificationKind.ERROR: "❌", NotificationKind.INFO: "ℹ️", NotificationKind.SUCCESS: "✅"}
    print(f"{icons[state.kind]} {state.message}")
    session.notifications.dismiss()
    return 1 if state.kind == NotificationKind.ERROR else 0


def _load_month(session: CurationSession, args) -> bool:
    month_index = args.month - 1 if args.month else session.month_index
    session.change_month(month_index, args.year)
    # a successful load opens no notification
    return not session.notifications.is_open


def run(args, session: CurationSession) -> int:
    if args.command == "bind":
        session.bind_channel(args.channel)
        return _report(session)

    if args.command == "status":
        if not session.identity.authenticated:
            print("ℹ️ Sign in first.")
            return 1
        binding = session.bindings.current_binding()
        if binding is None:
            print(f"No channel linked ({session.bindings.max_changes} changes allowed).")
        else:
            print(f"Linked channel: {binding.channel_id} "
                  f"({binding.change_count}/{binding.max_changes} changes used)")
        return 0

    if args.command == "submit":
        # the channel title is the sheet name
        session.start()
        if _report(session):
            return 1

    if not _load_month(session, args):
        return _report(session)

    if args.command == "videos":
        videos = session.selection.videos
        if not videos:
            print(f"No videos found for {session.month_name}.")
        for video in videos:
            print(f"{video.id}  {video.published_at:%Y-%m-%d}  {video.title}")
        return _report(session)

    listed = {v.id for v in session.selection.videos}
    for video_id in dict.fromkeys(args.select):
        if video_id not in listed:
            logger.warning(f"Video {video_id} is not in {session.month_name} {session.year}, ignoring it")
        session.toggle(video_id)
    for pair in args.format:
        video_id, _, fmt = pair.partition("=")
        if not session.set_format(video_id, fmt):
            return _report(session)

    session.submit()
    return _report(session)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution entry for the Curation Pipeline."""
    args = build_parser().parse_args(argv)
    config = load_configuration(args.config)

    storage = StorageManager(config.storage_root)
    setup_logging(storage.logs_path, config.log_level)

    identity = UserIdentity(authenticated=bool(args.email.strip()), name=args.name, email=args.email)
    logger.info("=" * 60)
    logger.info(f"Creator Curation Pipeline - {args.command.upper()} ({identity.user_key or 'signed out'})")
    logger.info("=" * 60)

    session = build_session(config, identity, storage)
    return run(args, session)


if __name__ == "__main__":
    sys.exit(main())
