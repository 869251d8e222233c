#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Run Flow
========
Runs one example flow from the shell.

Usage:
    python -m gemini_examples.scripts.run_flow --list
    python -m gemini_examples.scripts.run_flow story_generator --input '{"topic": "dragons"}'
    echo '{"prompt": "a cat in a cape"}' | python -m gemini_examples.scripts.run_flow flash_image_generator --from-stdin

Output (stdout JSON):
    {"success": true, "flow": "story_generator", "output": {...}}
    {"success": false, "error": {"status": "INTERNAL", "message": "...", "flow": "..."}}
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from gemini_examples.flows import FlowError, get_flow, list_flows

logger = logging.getLogger("examples.run_flow")


def _emit(payload: dict, out: TextIO) -> None:
    out.write(json.dumps(payload, ensure_ascii=False) + "\n")


def main(
    argv: Optional[List[str]] = None,
    service=None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """CLI entry point. Returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    parser = argparse.ArgumentParser(description="Run a Gemini example flow.")
    parser.add_argument("flow", nargs="?", help="Flow name (see --list).")
    parser.add_argument("--input", type=str, default=None, help="Flow input as JSON.")
    parser.add_argument("--from-stdin", action="store_true", help="Read input JSON from stdin.")
    parser.add_argument("--list", action="store_true", help="List available flows.")
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list:
        flows = [{"name": f.name, "description": f.description} for f in list_flows()]
        _emit({"success": True, "flows": flows}, stdout)
        return 0

    if not args.flow:
        _emit({"success": False, "error": {"status": "INVALID_ARGUMENT", "message": "flow name is required."}}, stdout)
        return 1

    try:
        raw = stdin.read() if args.from_stdin else (args.input or "{}")
        payload = json.loads(raw or "{}")
    except json.JSONDecodeError as exc:
        _emit({"success": False, "error": {"status": "INVALID_ARGUMENT", "message": f"Invalid JSON input: {exc}"}}, stdout)
        return 1

    try:
        flow = get_flow(args.flow, service=service)
        output = flow.run(payload)
    except KeyError as exc:
        _emit({"success": False, "error": {"status": "INVALID_ARGUMENT", "message": exc.args[0]}}, stdout)
        return 1
    except SystemExit:
        # Settings exit when GEMINI_API_KEY is missing; keep stdout JSON
        _emit(
            {
                "success": False,
                "error": {
                    "status": "INTERNAL",
                    "message": "Gemini API key not configured (set GEMINI_API_KEY).",
                    "flow": args.flow,
                },
            },
            stdout,
        )
        return 1
    except FlowError as exc:
        _emit({"success": False, "error": exc.to_dict()}, stdout)
        return 1

    _emit({"success": True, "flow": flow.name, "output": output.model_dump()}, stdout)
    return 0


def main_cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
