"""Long-option command line parsing with single or double dash prefixes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ArgMode(IntEnum):
    """Whether an option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass
class ParseResult:
    """Option values and positional values by name, plus an error flag.

    Options given without a value are set to "1"; names not seen stay "".
    """

    options: dict[str, str] = field(default_factory=dict)
    arguments: dict[str, str] = field(default_factory=dict)
    error: bool = False


@dataclass(frozen=True)
class _OptionSpec:
    name: str
    mode: ArgMode


class CommandLineParser:
    """Parse ``-name``/``--name`` options (unique prefixes allowed) and positionals."""

    def __init__(self) -> None:
        self._options: list[_OptionSpec] = []
        self._non_options: list[str] = []

    def add_option(self, name: str, has_arg: int | ArgMode) -> None:
        """Register a long option; ``has_arg`` must be 0, 1 or 2."""
        if name is None:
            raise ValueError("option name is required")
        try:
            mode = ArgMode(has_arg)
        except ValueError:
            raise ValueError(f"invalid argument mode: {has_arg!r}") from None
        self._options.append(_OptionSpec(name, mode))

    def add_non_option(self, name: str) -> None:
        """Register the next positional argument under ``name``."""
        self._non_options.append(name)

    def _match(self, name: str) -> _OptionSpec | None:
        for spec in self._options:
            if spec.name == name:
                return spec
        candidates = [spec for spec in self._options if spec.name.startswith(name)]
        return candidates[0] if len(candidates) == 1 else None

    def parse(self, argv: list[str], start_index: int = 1) -> ParseResult:
        """Parse ``argv`` from ``start_index`` on.

        Unknown, ambiguous or malformed options set ``error`` and are skipped.
        Positionals may appear anywhere; everything after ``--`` is positional.
        """
        result = ParseResult(
            options={spec.name: "" for spec in self._options},
            arguments={name: "" for name in self._non_options},
        )
        args = list(argv[start_index:])
        positional: list[str] = []
        pos = 0
        while pos < len(args):
            arg = args[pos]
            pos += 1
            if arg == "--":
                positional.extend(args[pos:])
                break
            if len(arg) < 2 or not arg.startswith("-"):
                positional.append(arg)
                continue

            body = arg[2:] if arg.startswith("--") else arg[1:]
            name, has_inline, inline = body.partition("=")
            spec = self._match(name)
            if spec is None:
                result.error = True
                continue

            value: str | None = None
            if spec.mode is ArgMode.NONE:
                if has_inline:
                    result.error = True
                    continue
            elif has_inline:
                value = inline
            elif spec.mode is ArgMode.REQUIRED:
                if pos >= len(args):
                    result.error = True
                    continue
                value = args[pos]
                pos += 1

            result.options[spec.name] = value if value is not None else "1"

        values = (arg for arg in positional if arg != "--")
        for name, value in zip(self._non_options, values):
            result.arguments[name] = value
        return result