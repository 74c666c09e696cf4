"""
Switchyard faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings) raised while scanning an argument vector.
- ParseError / ParseWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the offending token and its
  ordinal position in the vector (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The scanner builds faults and hands them to SwitchRegistry.trigger(), which
  merges the registry's runtime options (shell, fancy, colorful) and calls trigger().
- In non-shell mode, errors are raised and warnings go through warnings.warn;
  in shell mode, both are rendered to stderr via rich and errors exit with status 1.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - token shape (2111x)
      • EMPTY_SHORT_SWITCH, UNKNOWN_SWITCH
    - boolean switch values (2112x)
      • MISSING_BOOLEAN_VALUE, INVALID_BOOLEAN_VALUE
    - option switch values (2113x)
      • MISSING_OPTION_VALUE, INVALID_OPTION_VALUE
    - warnings (22xxx)
      • IGNORED_SWITCH

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- token shape errors (21xxx) ---
    EMPTY_SHORT_SWITCH          = 21111
    UNKNOWN_SWITCH              = 21112

    # --- boolean value errors (21xxx) ---
    MISSING_BOOLEAN_VALUE       = 21121
    INVALID_BOOLEAN_VALUE       = 21122

    # --- option value errors (21xxx) ---
    MISSING_OPTION_VALUE        = 21131
    INVALID_OPTION_VALUE        = 21132

    # --- warnings (22xxx) ---
    IGNORED_SWITCH              = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(self, palette):
    """
    shared rich renderer for errors and warnings.

    layout
    - plain:  "[ prog — code | Title ]", the message, then " → hint".
    - fancy:  the same message and hint inside a Panel titled with the header.
    """
    main = __import__("__main__")

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = self.options.get("colorful", False)
    fancy = self.options.get("fancy", False)
    kind = "error" if isinstance(self, ParseError) else "warning"

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    registry = self.options.get("registry")
    prog = text(getattr(main, "__prog__", getattr(registry, "command", None) or "switchyard"), styler("prog-name"))

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(self.code.normalize() if self.code else "", styler("code")),
        " | ",
        text(str(self.options.get("title", kind)).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(self.message, styler(kind + "-message"))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left")

    return Group(header, message, hint)


class ParseError(Exception):
    """
    base type of every fault that aborts a parse.

    attributes
    - message: the one-sentence, position-first description.
    - options: read-only mapping of context (title, code, hint, token, index,
      input, switch) and runtime flags (registry, shell, fancy, colorful).
    - token / index / code: shortcuts into options (None when not provided).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyShortSwitchError(ParseError): ...
class UnknownSwitchError(ParseError): ...
class MissingBooleanValueError(ParseError): ...
class InvalidBooleanValueError(ParseError): ...
class MissingOptionValueError(ParseError): ...
class InvalidOptionValueError(ParseError): ...


class ParseWarning(Warning):
    """
    base type of non-fatal faults; the parse continues after them.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    token = ParseError.token
    index = ParseError.index
    code = ParseError.code

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IgnoredSwitchWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, errors are raised
      and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseError",
    "EmptyShortSwitchError",
    "UnknownSwitchError",
    "MissingBooleanValueError",
    "InvalidBooleanValueError",
    "MissingOptionValueError",
    "InvalidOptionValueError",
    "ParseWarning",
    "IgnoredSwitchWarning",
    "trigger",
    "getdoc",
)
