"""Command line entry point: ``swissbill [-v] <befehl> [argumente]``."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from types import ModuleType
from typing import Iterable, Mapping, Sequence

from .commands import HANDLED_ERRORS, check, reference, report_error, slip, summary
from .logging import configure_logging


@dataclass(frozen=True)
class CommandSpec:
    """A sub-command backed by a module exposing ``SUMMARY`` and ``main``."""

    name: str
    module: ModuleType

    @property
    def summary(self) -> str:
        return self.module.SUMMARY

    def run(self, argv: list[str]) -> int:
        """Run the command's ``main`` and return its exit status."""

        try:
            result = self.module.main(argv)
        except SystemExit as exc:  # argparse exits on --help and usage errors
            if exc.code is None:
                return 0
            return exc.code if isinstance(exc.code, int) else 1
        except HANDLED_ERRORS as exc:
            return report_error(exc)
        return int(result or 0)


_COMMANDS: tuple[CommandSpec, ...] = tuple(
    CommandSpec(name, module)
    for name, module in (
        ("summary", summary),
        ("reference", reference),
        ("slip", slip),
        ("check", check),
    )
)

_COMMAND_INDEX: Mapping[str, CommandSpec] = {spec.name: spec for spec in _COMMANDS}


def available_commands() -> Iterable[CommandSpec]:
    return _COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Top-level parser; arguments after the command name are forwarded."""

    parser = argparse.ArgumentParser(
        prog="swissbill",
        description="Werkzeuge für Schweizer Rechnungen und QR-Zahlteile",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Protokollmeldungen zusätzlich auf stderr ausgeben.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="befehl", required=True)
    for spec in _COMMANDS:
        subparser = subparsers.add_parser(spec.name, help=spec.summary, add_help=False)
        subparser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def run(command: str, argv: Sequence[str] | None = None) -> int:
    """Execute *command* with ``argv``."""

    spec = _COMMAND_INDEX.get(command)
    if spec is None:
        raise ValueError(f"Unbekannter Befehl: {command}")
    return spec.run(list(argv or []))


def main(argv: Sequence[str] | None = None) -> int:
    namespace, extras = build_parser().parse_known_args(argv)
    forwarded = list(namespace.args) + extras

    logger = configure_logging(verbose=namespace.verbose)
    logger.debug("Running command %s with %s", namespace.command, forwarded)

    if forwarded and forwarded[0] in {"-h", "--help"}:
        forwarded = ["--help"]
    return run(namespace.command, forwarded)


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
