"""Command-line interface for the game library unifier."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .pipelines.context import PipelineContext
from .pipelines.export_pipeline import write_unified_csv, write_unified_json
from .pipelines.fetch_pipeline import run_merge
from .schema import ALLOWED_SOURCES, PLATFORM_ORDER, SOURCE_ALIASES, Platform
from .utils import RunPaths
from .utils.source_selection import parse_sources


def setup_logging(log_file: Path) -> None:
    """Configure logging to both console and file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Silence verbose HTTP debug logs by default
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    logging.info(f"Logging to file: {log_file}")


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _prepare_run_paths(*, project_root: Path, args: argparse.Namespace) -> RunPaths:
    """
    Resolve the run dir (default `<repo>/data`) and apply --cache/--logs-dir overrides.
    """

    def _abs(p: Path | None) -> Path | None:
        if p is None:
            return None
        return (p if p.is_absolute() else (project_root / p)).resolve()

    run_dir = _abs(getattr(args, "run_dir", None)) or (project_root / "data")
    rp = RunPaths.from_run_dir(run_dir)
    rp = replace(
        rp,
        cache_dir=_abs(getattr(args, "cache", None)) or rp.cache_dir,
        logs_dir=_abs(getattr(args, "logs_dir", None)) or rp.logs_dir,
    )
    rp.ensure()
    return rp


def _default_log_file(*, command_name: str, logs_dir: Path) -> Path:
    logs_dir.mkdir(parents=True, exist_ok=True)

    now = datetime.now()
    stamp = now.strftime("%Y%m%d-%H%M%S") + f".{now.microsecond // 1000:03d}"
    candidate = logs_dir / f"log-{stamp}-{command_name}.log"
    if not candidate.exists():
        return candidate

    for i in range(2, 1000):
        p = logs_dir / f"log-{stamp}-{command_name}-{i}.log"
        if not p.exists():
            return p
    return logs_dir / f"log-{stamp}-{command_name}-{os.getpid()}.log"


def _setup_logging_from_args(
    run_paths: RunPaths,
    log_file: Path | None,
    debug: bool,
    *,
    command_name: str,
) -> None:
    setup_logging(
        log_file or _default_log_file(command_name=command_name, logs_dir=run_paths.logs_dir)
    )
    if debug:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    argv = " ".join(shlex.quote(a) for a in sys.argv)
    logging.info(f"Invocation: {argv}")


def _context(args: argparse.Namespace, run_paths: RunPaths) -> PipelineContext:
    credentials_path = args.credentials or (_project_root() / "data" / "credentials.yaml")
    sources = parse_sources(
        getattr(args, "source", "all"), allowed=set(ALLOWED_SOURCES), aliases=SOURCE_ALIASES
    )
    return PipelineContext(
        cache_dir=run_paths.cache_dir, credentials_path=credentials_path, sources=sources
    )


def _command_merge(args: argparse.Namespace) -> None:
    project_root = _project_root()
    run_paths = _prepare_run_paths(project_root=project_root, args=args)
    _setup_logging_from_args(run_paths, args.log_file, args.debug, command_name="merge")

    exports: dict[Platform, Path] = {}
    for platform in PLATFORM_ORDER:
        path = getattr(args, platform.key, None)
        if path is None:
            default = run_paths.input_dir / f"{platform.key}.json"
            if not default.exists():
                continue
            logging.info(f"Using {platform.value} export from run dir: {default}")
            path = default
        if not path.exists():
            raise SystemExit(f"{platform.value} export not found: {path}")
        exports[platform] = path

    if not exports and not args.steam_api:
        raise SystemExit(
            "Nothing to merge: pass an export file, put <platform>.json under <run-dir>/input, "
            "or use --steam-api"
        )

    ctx = _context(args, run_paths)
    games = run_merge(
        ctx,
        exports=exports,
        steam_id=args.steam_id,
        use_steam_api=bool(args.steam_api),
        use_cache=bool(args.use_cache),
    )

    out = args.out or (run_paths.output_dir / "Games_Unified.csv")
    write_unified_csv(games, out)
    if args.json:
        write_unified_json(games, args.json)


def _command_cache_status(args: argparse.Namespace) -> None:
    project_root = _project_root()
    run_paths = _prepare_run_paths(project_root=project_root, args=args)
    _setup_logging_from_args(run_paths, args.log_file, args.debug, command_name="cache-status")

    cache = _context(args, run_paths).library_cache()
    status = cache.status()
    if not status:
        logging.info(f"No cached libraries in {cache.path}")
        return
    for key, st in status.items():
        state = "expired" if st.expired else "fresh"
        logging.info(f"{key}: {st.count} games, cached {st.age} ({state})")


def _command_clear_cache(args: argparse.Namespace) -> None:
    project_root = _project_root()
    run_paths = _prepare_run_paths(project_root=project_root, args=args)
    _setup_logging_from_args(run_paths, args.log_file, args.debug, command_name="clear-cache")

    cache = _context(args, run_paths).library_cache()
    if args.platform:
        try:
            platform = Platform.from_key(args.platform)
        except ValueError as e:
            raise SystemExit(str(e)) from e
        cache.clear_platform(platform)
        return
    cache.clear()


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        raise SystemExit(
            "Missing command. Use one of: merge, cache-status, clear-cache. "
            "Run `game-library-unifier --help` for usage."
        )

    parser = argparse.ArgumentParser(
        description="Merge Steam/Xbox/GOG/Epic/Amazon libraries into one table"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_common = argparse.ArgumentParser(add_help=False)
    p_common.add_argument(
        "--run-dir",
        type=Path,
        help="Run directory containing input/output/cache/logs (default: ./data)",
    )
    p_common.add_argument(
        "--logs-dir",
        type=Path,
        help="Override logs directory (default: <run-dir>/logs)",
    )
    p_common.add_argument("--cache", type=Path, help="Cache directory (default: <run-dir>/cache)")
    p_common.add_argument(
        "--credentials", type=Path, help="Credentials YAML (default: data/credentials.yaml)"
    )
    p_common.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (default: <run-dir>/logs/log-<timestamp>-<command>.log)",
    )
    p_common.add_argument(
        "--debug", action="store_true", help="Enable DEBUG logging (default: INFO)"
    )

    p_merge = sub.add_parser(
        "merge",
        help="Merge per-platform libraries into Games_Unified.csv",
        parents=[p_common],
    )
    for platform in PLATFORM_ORDER:
        p_merge.add_argument(
            f"--{platform.key}",
            type=Path,
            help=(
                f"{platform.value} library export (JSON array or wrapped object) "
                f"(default: <run-dir>/input/{platform.key}.json if present)"
            ),
        )
    p_merge.add_argument(
        "--steam-api",
        action="store_true",
        help="Fetch the Steam library from the Steam Web API (needs steam.api_key)",
    )
    p_merge.add_argument(
        "--steam-id", type=str, help="SteamID64 to fetch (default: steam.steam_id)"
    )
    p_merge.add_argument(
        "--source",
        type=str,
        default="all",
        help="Which platforms to merge (e.g. 'pc' or 'steam,gog') (default: all)",
    )
    p_merge.add_argument(
        "--out",
        type=Path,
        help="Output CSV (default: <run-dir>/output/Games_Unified.csv)",
    )
    p_merge.add_argument("--json", type=Path, help="Also write the unified records as JSON")
    p_merge.add_argument(
        "--use-cache",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Reuse cached platform libraries younger than 24h (default: false)",
    )
    p_merge.set_defaults(_fn=_command_merge)

    p_status = sub.add_parser(
        "cache-status", help="Show cached library counts and ages", parents=[p_common]
    )
    p_status.set_defaults(_fn=_command_cache_status)

    p_clear = sub.add_parser("clear-cache", help="Delete cached libraries", parents=[p_common])
    p_clear.add_argument(
        "--platform",
        type=str,
        help="Only clear one platform (steam, xbox, gog, epic, amazon)",
    )
    p_clear.set_defaults(_fn=_command_clear_cache)

    ns = parser.parse_args(argv)
    ns._fn(ns)
    return


if __name__ == "__main__":
    main()
