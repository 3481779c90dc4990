import argparse
import json
import logging
import sys

from shell_assistant.container import container
from shell_assistant.exceptions import BaseAppError, ResolutionExhaustedError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shell-assistant-ask",
        description="Turn a natural-language request into a shell command.",
    )
    parser.add_argument("words", nargs="+", help="What you want to do, in plain words")
    parser.add_argument(
        "--json", action="store_true", help="Print the raw result as JSON"
    )
    parser.add_argument(
        "--plain", action="store_true", help="Print plain text (no Panel/colors)"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        result = container.get_generate_command_use_case().execute(" ".join(args.words))
    except ResolutionExhaustedError as e:
        if e.is_overloaded:
            print("Error: the AI service is overloaded, try again later.", file=sys.stderr)
        else:
            print(f"Error: {e.last_error_message}", file=sys.stderr)
        return 1
    except BaseAppError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.get_details(), ensure_ascii=False, indent=2))
        return 0

    if args.plain:
        print(f"$ {result.command}")
        print(result.explanation)
        return 0

    from rich import box
    from rich.console import Console
    from rich.panel import Panel
    from rich.syntax import Syntax

    console = Console(soft_wrap=True)
    console.print(
        Panel(
            Syntax(result.command, "bash"),
            title=result.model_used or "command",
            box=box.ROUNDED,
            border_style="cyan",
            expand=True,
        )
    )
    console.print(result.explanation)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
