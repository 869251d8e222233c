#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Example Runner
==============
Interactive menu that scaffolds a Genkit + Gemini example project.

This script:
  1. Checks that the Gemini CLI is installed
  2. Shows the example menu and reads a selection
  3. Creates `<prefix>-<scenario>-NNN` (first free number)
  4. Copies the Gemini guide into the new folder
  5. Runs the Gemini CLI there with the scenario prompt
  6. Prints how to open and start the generated project

Usage:
    python -m gemini_examples.scripts.run_example
    python -m gemini_examples.scripts.run_example --yolo
    python -m gemini_examples.scripts.run_example --choice 3 --output-dir ~/projects
"""

import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from gemini_examples.config.settings import SCENARIOS, Scenario, settings

logger = logging.getLogger("examples.runner")

# ---------------------------------------------------------------------------
# Terminal colors
# ---------------------------------------------------------------------------
RED = "\033[0;31m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
YELLOW = "\033[1;33m"
CYAN = "\033[0;36m"
MAGENTA = "\033[0;35m"
NC = "\033[0m"
BOLD = "\033[1m"
BLINK = "\033[5m"

RULE = "═" * 51

BANNER = r"""
   ██████╗ ███████╗███╗   ██╗██╗  ██╗██╗████████╗
  ██╔════╝ ██╔════╝████╗  ██║██║ ██╔╝██║╚══██╔══╝
  ██║  ███╗█████╗  ██╔██╗ ██║█████╔╝ ██║   ██║
  ██║   ██║██╔══╝  ██║╚██╗██║██╔═██╗ ██║   ██║
  ╚██████╔╝███████╗██║ ╚████║██║  ██╗██║   ██║
   ╚═════╝ ╚══════╝╚═╝  ╚═══╝╚═╝  ╚═╝╚═╝   ╚═╝
"""

CLI_INSTALL_HINT = "npm install -g @google/gemini-cli"


class InvalidSelection(ValueError):
    """Menu input that does not name a scenario."""


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def parse_choice(raw: str, scenarios: List[Scenario]) -> Optional[Scenario]:
    """
    Resolve menu input to a scenario.

    Returns:
        The scenario, or None when the user chose 0 (exit).

    Raises:
        InvalidSelection: For anything that is not 0 or a scenario number.
    """
    text = (raw or "").strip()
    if text == "0":
        return None
    if not (text.isascii() and text.isdigit()):
        raise InvalidSelection(f"Invalid selection: {raw!r}")
    number = int(text)
    for sc in scenarios:
        if sc.number == number:
            return sc
    raise InvalidSelection(f"Invalid selection: {raw!r}")


def next_folder_name(base_dir: Path, prefix: str, slug: str) -> Path:
    """
    First non-existing `<prefix>-<slug>-NNN` under base_dir, counting from 001.
    """
    base = f"{prefix}-{slug}"
    counter = 1
    candidate = Path(base_dir) / f"{base}-{counter:03d}"
    while candidate.exists():
        counter += 1
        candidate = Path(base_dir) / f"{base}-{counter:03d}"
    return candidate


def build_cli_command(cli_command: str, prompt: str, yolo: bool = False) -> List[str]:
    cmd = [cli_command, "-i", prompt]
    if yolo:
        cmd.append("--yolo")
    return cmd


def prepare_project(
    scenario: Scenario,
    base_dir: Path,
    guide_path: Path,
    prefix: str,
) -> Path:
    """
    Create the project folder and copy the guide into it.

    Raises:
        FileNotFoundError: If the guide does not exist (nothing is created).
    """
    guide = Path(guide_path)
    if not guide.is_file():
        raise FileNotFoundError(f"Guide not found: {guide}")

    folder = next_folder_name(base_dir, prefix, scenario.slug)
    folder.mkdir(parents=True)
    shutil.copy2(guide, folder / guide.name)
    logger.info("Created %s with %s", folder, guide.name)
    return folder


# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------


def print_banner() -> None:
    print(f"{CYAN}{BANNER}{NC}")
    print(f"{MAGENTA}        🤖 AI-Powered Development Framework 🤖{NC}")
    print()
    print(f"{BLUE}{BOLD}{RULE}{NC}")
    print(f"{BLUE}{BOLD}          Genkit + Gemini Examples Runner{NC}")
    print(f"{BLUE}{BOLD}{RULE}{NC}")
    print()


def print_yolo_warning() -> None:
    print(f"{RED}{BLINK}⚠️  YOLO MODE ACTIVATED ⚠️{NC}")
    print(f"{YELLOW}{BOLD}{'━' * 49}{NC}")
    print(f"{YELLOW}WARNING: All tool calls will be automatically approved!{NC}")
    print(f"{YELLOW}This means Gemini CLI will:{NC}")
    print(f"{YELLOW}  • Create files without confirmation{NC}")
    print(f"{YELLOW}  • Install packages without asking{NC}")
    print(f"{YELLOW}  • Execute commands automatically{NC}")
    print(f"{YELLOW}{BOLD}{'━' * 49}{NC}")
    print()


def print_menu(scenarios: List[Scenario]) -> None:
    print(f"{BOLD}Select an example to generate:{NC}")
    print()
    for sc in scenarios:
        print(f"{YELLOW}[{sc.number}]{NC} {sc.description}")
        if sc.tier_note:
            color = RED if sc.tier_level == "warning" else YELLOW
            print(f"    {color}⚠️  {sc.tier_note}{NC}")
        print()
    print(f"{YELLOW}[0]{NC} Exit")
    print()


def print_next_steps(folder: Path) -> None:
    print()
    print(f"{BLUE}{RULE}{NC}")
    print(f"{GREEN}{BOLD}✅ Project generated successfully!{NC}")
    print()
    print(f"{YELLOW}To navigate to your project, run:{NC}")
    print(f"{CYAN}{BOLD}cd {folder}{NC}")
    print()
    print(f"{YELLOW}To start the Genkit dev server:{NC}")
    print(f"{CYAN}{BOLD}cd {folder} && npm run dev{NC}")
    print(f"{BLUE}{RULE}{NC}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scaffold a Genkit + Gemini example project with the Gemini CLI."
    )
    parser.add_argument(
        "--yolo", action="store_true", help="Auto-approve every Gemini CLI tool call."
    )
    parser.add_argument(
        "--no-confirm", action="store_true", help="Do not pause after the YOLO warning."
    )
    parser.add_argument("--choice", type=str, help="Menu number to run (skips the prompt).")
    parser.add_argument(
        "--output-dir", type=Path, default=None, help="Where to create the project folder."
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr.")
    return parser


def main(
    argv: Optional[List[str]] = None,
    input_func: Callable[[str], str] = input,
    run: Callable = subprocess.run,
) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    runner_cfg = settings.runner
    print_banner()

    if args.yolo:
        print_yolo_warning()
        if not args.no_confirm:
            input_func(f"{RED}Press Enter to continue in YOLO mode, or Ctrl+C to exit...{NC}")
            print()

    if shutil.which(runner_cfg.cli_command) is None:
        print(f"{RED}Error: Gemini CLI is not installed!{NC}")
        print()
        print(f"{YELLOW}To install Gemini CLI, run:{NC}")
        print(f"{GREEN}{CLI_INSTALL_HINT}{NC}")
        print()
        return 1

    print(f"{GREEN}✓ Gemini CLI is installed{NC}")
    print()

    raw = args.choice
    if raw is None:
        print_menu(SCENARIOS)
        raw = input_func(f"Enter your choice (0-{len(SCENARIOS)}): ")

    try:
        scenario = parse_choice(raw, SCENARIOS)
    except InvalidSelection:
        print(f"{RED}Invalid selection!{NC}")
        return 1

    if scenario is None:
        print(f"{GREEN}Exiting...{NC}")
        return 0

    print()
    print(f"{BLUE}{BOLD}Selected:{NC} {scenario.description}")
    print()

    base_dir = args.output_dir or Path.cwd()
    try:
        folder = prepare_project(scenario, base_dir, runner_cfg.guide_path, runner_cfg.folder_prefix)
    except (FileNotFoundError, OSError) as exc:
        print(f"{RED}Error: {exc}{NC}")
        return 1

    print(f"{GREEN}Created folder:{NC} {folder.name}")
    print(f"{GREEN}Copied {runner_cfg.guide_path.name} to project folder{NC}")
    print()
    print(f"{BLUE}{BOLD}Running Gemini CLI...{NC}")
    print(f'{YELLOW}Prompt:{NC} "{scenario.prompt}"')
    if args.yolo:
        print(f"{RED}{BOLD}Mode: YOLO (auto-approve enabled){NC}")
    print()
    print(f"{BLUE}{RULE}{NC}")
    print()

    cmd = build_cli_command(runner_cfg.cli_command, scenario.prompt, args.yolo)
    logger.debug("Running %s in %s", cmd[0], folder)
    result = run(cmd, cwd=str(folder))
    returncode = getattr(result, "returncode", 0)

    if returncode != 0:
        print()
        print(f"{RED}Gemini CLI exited with code {returncode}.{NC}")
        print(f"{YELLOW}Partial output (if any) is in:{NC} {CYAN}{folder}{NC}")
        return returncode

    print_next_steps(folder)
    return 0


def main_cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main_cli()
