"""
Switchyard scanner: classify and consume an argument vector against a registry.

Phases
- setup
  • validate the vector (iterable of strings, command name at index 0).
  • record it on the registry and reset the positionals of any previous parse.
- loop (single left-to-right pass, index-based, no backtracking)
  • classify the token: bare dash, LONG (`--key`), SHORT (`-key`) or POSITIONAL.
  • POSITIONAL: record (token, position) and advance one.
  • SHORT: resolve boolean → argument → option (any option entry); advance one.
  • LONG: resolve boolean → argument → option by long form:
      – boolean: consume one value token from the on/off vocabulary.
      – argument: consume every following POSITIONAL token (possibly none).
      – option: consume one value token that must be one of the options.
    unknown long keys are ignored with a warning, or rejected in strict mode.
- faults
  • the first error aborts the scan; switches matched earlier keep their state.

Keys are folded before matching; values collected by argument switches and
positionals are kept verbatim.
"""
import difflib
from enum import Enum

from .faults import *
from .switches import BooleanSwitch, ArgumentSwitch, OptionSwitch, Positional
from .utils import *

# keyword vocabulary for `--boolean <word>`
ON = ("on", "y", "yes")
OFF = ("off", "n", "no")


class Token(Enum):
    """
    Token classes recognized by the scanner.
    """
    EMPTY = "empty"
    SHORT = "short"
    LONG = "long"
    POSITIONAL = "positional"


def classify(token, /):
    """
    Return the class of a raw token.

    - "-"            → Token.EMPTY (never valid)
    - "--key"        → Token.LONG  (key may be empty for "--")
    - "-key"         → Token.SHORT
    - anything else  → Token.POSITIONAL (including the empty string)
    """
    if not token.startswith("-"):
        return Token.POSITIONAL
    if token == "-":
        return Token.EMPTY
    if token.startswith("--"):
        return Token.LONG
    return Token.SHORT


def sanitize(argv, /):
    """
    Validate an argument vector and materialize it as a tuple.

    Raises
    - TypeError: not an iterable, a bare string, or contains non-string items.
    - ValueError: empty (the invoked command name is required at index 0).
    """
    if isinstance(argv, str):
        raise TypeError("argument vector must be an iterable of strings, not a string")
    try:
        argv = tuple(argv)
    except TypeError:
        raise TypeError("argument vector must be an iterable of strings") from None
    if not all(isinstance(token, str) for token in argv):
        raise TypeError("argument vector must be an iterable of strings")
    if not argv:
        raise ValueError("argument vector must contain the invoked command name")
    return argv


def _vocabulary():
    return ", ".join(ON + OFF)


class ArgumentScanner:
    """
    One-shot scanner that mutates a SwitchRegistry in place.

    The scanner keeps the vector and the current index while parsing; the
    registry owns every piece of state that outlives the parse.
    """

    def __init__(self, registry):
        self._registry = registry
        self._tokens = ()
        self._index = 0

    def _suggest(self, input, candidates):
        suggestions = difflib.get_close_matches(input, candidates, 1)
        return suggestions[0] if suggestions else None

    def _parse_short(self, token):
        """
        resolve `-key` against short forms: boolean, then argument, then option entries.
        """
        registry = self._registry
        input = fold(token[1:])

        if switch := registry.find_short(BooleanSwitch, input):
            switch._override(True)
        elif switch := registry.find_short(ArgumentSwitch, input):
            switch._override(switch.preset)
        elif switch := registry.find_short(OptionSwitch, input):
            switch._override(switch.options.index(input))
        else:
            shorts = [
                "-" + form
                for switch in registry
                for form in (switch.options if isinstance(switch, OptionSwitch) else [switch.short])
                if form
            ]
            if suggestion := self._suggest("-" + input, shorts):
                hint = "did you mean %r?" % suggestion
            else:
                hint = "check the spelling of the switch or remove it"
            return registry.trigger(UnknownSwitchError(
                "unknown switch %r at %s position" % (token, ordinal(self._index)),
                title="unknown switch",
                code=FaultCode.UNKNOWN_SWITCH,
                hint=hint,
                token=token,
                index=self._index,
                input=input,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH)
            ))

        self._index += 1

    def _parse_boolean(self, switch, token):
        """
        consume the on/off word that follows `--boolean`.
        """
        start = self._index
        self._index += 1

        if self._index >= len(self._tokens):
            return self._registry.trigger(MissingBooleanValueError(
                "boolean switch %r at %s position requires a value" % (token, ordinal(start)),
                title="missing boolean value",
                code=FaultCode.MISSING_BOOLEAN_VALUE,
                hint="add one of %s after it (for example: %s on)" % (_vocabulary(), token),
                token=token,
                index=start,
                input=switch.long,
                switch=switch,
                docs=getdoc(FaultCode.MISSING_BOOLEAN_VALUE)
            ))

        value = self._tokens[self._index]
        word = fold(value)

        if word in ON:
            switch._override(True)
        elif word in OFF:
            switch._override(False)
        else:
            return self._registry.trigger(InvalidBooleanValueError(
                "invalid value %r for boolean switch %r at %s position" % (value, token, ordinal(self._index)),
                title="invalid boolean value",
                code=FaultCode.INVALID_BOOLEAN_VALUE,
                hint="use one of %s" % _vocabulary(),
                token=value,
                index=self._index,
                input=switch.long,
                switch=switch,
                docs=getdoc(FaultCode.INVALID_BOOLEAN_VALUE)
            ))

        self._index += 1

    def _parse_argument(self, switch):
        """
        collect every positional-looking token that follows `--argument`.

        the value is replaced (cleared first) even when no token follows.
        """
        switch._override()
        self._index += 1

        while self._index < len(self._tokens) and classify(value := self._tokens[self._index]) is Token.POSITIONAL:
            switch._append(value)
            self._index += 1

    def _parse_option(self, switch, token):
        """
        consume the option name that follows `--option`.
        """
        start = self._index
        self._index += 1
        choices = ", ".join(switch.options)

        if self._index >= len(self._tokens):
            return self._registry.trigger(MissingOptionValueError(
                "option switch %r at %s position requires a value" % (token, ordinal(start)),
                title="missing option value",
                code=FaultCode.MISSING_OPTION_VALUE,
                hint="add one of %s after it (for example: %s %s)" % (choices, token, switch.options[0]),
                token=token,
                index=start,
                input=switch.long,
                switch=switch,
                docs=getdoc(FaultCode.MISSING_OPTION_VALUE)
            ))

        value = self._tokens[self._index]

        try:
            index = switch.options.index(fold(value))
        except ValueError:
            if suggestion := self._suggest(fold(value), switch.options):
                hint = "did you mean %r? valid options are %s" % (suggestion, choices)
            else:
                hint = "use one of %s" % choices
            return self._registry.trigger(InvalidOptionValueError(
                "invalid value %r for option switch %r at %s position" % (value, token, ordinal(self._index)),
                title="invalid option value",
                code=FaultCode.INVALID_OPTION_VALUE,
                hint=hint,
                token=value,
                index=self._index,
                input=switch.long,
                switch=switch,
                docs=getdoc(FaultCode.INVALID_OPTION_VALUE)
            ))

        switch._override(index)
        self._index += 1

    def _parse_long(self, token):
        """
        resolve `--key` against long forms: boolean, then argument, then option.
        """
        registry = self._registry
        input = fold(token[2:])

        if switch := registry.find_long(BooleanSwitch, input):
            return self._parse_boolean(switch, token)
        if switch := registry.find_long(ArgumentSwitch, input):
            return self._parse_argument(switch)
        if switch := registry.find_long(OptionSwitch, input):
            return self._parse_option(switch, token)

        longs = ["--" + switch.long for switch in registry if switch.long]
        if suggestion := self._suggest("--" + input, longs):
            hint = "did you mean %r?" % suggestion
        else:
            hint = "check the spelling of the switch or remove it"

        start = self._index
        self._index += 1

        if registry.strict:
            return registry.trigger(UnknownSwitchError(
                "unknown switch %r at %s position" % (token, ordinal(start)),
                title="unknown switch",
                code=FaultCode.UNKNOWN_SWITCH,
                hint=hint,
                token=token,
                index=start,
                input=input,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH)
            ))

        registry.trigger(IgnoredSwitchWarning(
            "unknown switch %r at %s position was ignored" % (token, ordinal(start)),
            title="ignored switch",
            code=FaultCode.IGNORED_SWITCH,
            hint=hint,
            token=token,
            index=start,
            input=input,
            docs=getdoc(FaultCode.IGNORED_SWITCH)
        ))

    def parse(self, argv, /):
        """
        Scan `argv` (command name at index 0) and update the registry.
        """
        registry = self._registry

        self._tokens = sanitize(argv)
        self._index = 1

        registry._argv = self._tokens
        registry._positionals.clear()

        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            match classify(token):
                case Token.POSITIONAL:
                    registry._positionals.append(Positional(token, self._index))
                    self._index += 1
                case Token.SHORT:
                    self._parse_short(token)
                case Token.LONG:
                    self._parse_long(token)
                case Token.EMPTY:
                    registry.trigger(EmptyShortSwitchError(
                        "bare dash at %s position is not a valid switch" % ordinal(self._index),
                        title="empty short switch",
                        code=FaultCode.EMPTY_SHORT_SWITCH,
                        hint="write a switch name right after the dash (for example: -v) or remove it",
                        token=token,
                        index=self._index,
                        input="",
                        docs=getdoc(FaultCode.EMPTY_SHORT_SWITCH)
                    ))


__all__ = (
    "Token",
    "classify",
    "sanitize",
    "ArgumentScanner",
)
