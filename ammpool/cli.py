"""
Command-line front end: validate a JSON spend or issuance request.

Exit codes: 0 accepted, 1 rejected, 2 unreadable request or config.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import yaml

from .config import DEFAULT_CONFIG, ProtocolConfig, load_protocol_config
from .integration.runner import run_request, verdict_to_json
from .integration.tx_json import parse_request

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AMMPOOL_CONFIG"


def _resolve_config(path: Path | None) -> ProtocolConfig:
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if not env_path:
            return DEFAULT_CONFIG
        path = Path(env_path)
    logger.info(f"loading protocol config from {path}")
    return load_protocol_config(path)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Validate a pool spend or issuance request (JSON).")
    p.add_argument("request", type=Path, help="Path to the JSON request ('-' for stdin)")
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML protocol config (default: ${CONFIG_ENV_VAR} or built-in constants)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every failed invariant")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = _resolve_config(args.config)
        if str(args.request) == "-":
            raw = json.load(sys.stdin)
        else:
            raw = json.loads(args.request.read_text(encoding="utf-8"))
        request = parse_request(raw)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, ValueError) as exc:
        print(f"validate_pool_tx error: {exc}", file=sys.stderr)
        return 2

    verdict = run_request(request, config=config)
    print(verdict_to_json(verdict))
    if not verdict.accepted:
        logger.info(f"rejected: {', '.join(verdict.names)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
