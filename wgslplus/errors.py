"""Exceptions raised while parsing and evaluating shader templates."""

from __future__ import annotations


class WgslError(Exception):
    pass


# --- Directive errors ---

class UnknownOperationError(WgslError):
    def __init__(self, keyword: str):
        super().__init__(f"Unknown operation '{keyword}'")
        self.keyword = keyword


class InvalidIfBlockError(WgslError):
    def __init__(self, message: str = "Invalid if block"):
        super().__init__(message)


class LeftoverLinesError(WgslError):
    def __init__(self, lines: list[str]):
        super().__init__(f"Unexpected lines after end of shader: {lines[0]!r}")
        self.lines = lines


# --- Expression syntax errors ---

class NoExpressionError(WgslError):
    def __init__(self, message: str = "Expected an expression"):
        super().__init__(message)


class NoClosingParenthesisError(WgslError):
    def __init__(self):
        super().__init__("Missing closing parenthesis")


class DuplicatePeriodError(WgslError):
    def __init__(self):
        super().__init__("Number literal contains more than one '.'")


class InvalidBaseError(WgslError):
    def __init__(self, literal: str):
        super().__init__(f"Invalid base prefix in number literal '{literal}'")
        self.literal = literal


class NumberConversionError(WgslError):
    def __init__(self, literal: str, reason: str):
        super().__init__(f"Cannot convert '{literal}': {reason}")
        self.literal = literal


class IntegerConversionError(NumberConversionError):
    pass


class FloatConversionError(NumberConversionError):
    pass


class LeftoverCharsError(WgslError):
    def __init__(self, text: str):
        super().__init__(f"Unexpected characters after expression: '{text}'")
        self.text = text


class ExpressionTooDeepError(WgslError):
    def __init__(self):
        super().__init__("Expression is nested too deeply to parse")


# --- Evaluation errors ---

class UndefinedVariableError(WgslError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name


class InvalidExpressionError(WgslError):
    pass


# --- Workspace errors ---

class ShaderNotFoundError(WgslError):
    def __init__(self, path: str):
        super().__init__(f"Shader not found: {path}")
        self.path = path


class CircularIncludeError(WgslError):
    def __init__(self, chain: list[str]):
        super().__init__(f"Circular include detected: {' -> '.join(chain)}")
        self.chain = chain
