"""Calculator state and the expression evaluator behind it."""

from __future__ import annotations

import math
import re

_PRECEDENCE = {
    "+": 1,
    "-": 1,
    "×": 2,
    "÷": 2,
    "%": 2,
    "√": 3,
    "²": 4,
    "(": 0,
    ")": 0,
}

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

ERROR = "Error"


def _parse_number(text: str) -> float | None:
    text = text.strip()
    if _NUMBER.fullmatch(text):
        return float(text)
    return None


def _format_number(value: float) -> str:
    return format(value, "g")


def _apply(operation: str, numbers: list[float]) -> None:
    if operation == "√":
        if not numbers:
            return
        a = numbers.pop()
        numbers.append(0.0 if a < 0 else math.sqrt(a))
        return
    if operation == "²":
        if not numbers:
            return
        a = numbers.pop()
        numbers.append(a * a)
        return
    if len(numbers) < 2:
        return

    b = numbers.pop()
    a = numbers.pop()
    if operation == "+":
        result = a + b
    elif operation == "-":
        result = a - b
    elif operation == "×":
        result = a * b
    elif operation == "÷":
        result = 0.0 if b == 0 else a / b
    elif operation == "%":
        try:
            result = math.fmod(a, b)
        except ValueError:
            result = math.nan
    else:
        return
    numbers.append(result)


def evaluate_expression(expression: str) -> str:
    """Evaluate a space-separated expression; return the result or ``"Error"``."""
    operators: list[str] = []
    numbers: list[float] = []

    for token in (part for part in expression.split(" ") if part):
        if token == "(":
            operators.append(token)
        elif token == ")":
            while operators and operators[-1] != "(":
                _apply(operators.pop(), numbers)
            if not operators:
                return ERROR
            operators.pop()
        elif token in ("√", "²"):
            operators.append(token)
        elif token in _PRECEDENCE:
            while operators and _PRECEDENCE[operators[-1]] >= _PRECEDENCE[token]:
                _apply(operators.pop(), numbers)
            operators.append(token)
        else:
            number = _parse_number(token)
            if number is None:
                return ERROR
            numbers.append(number)

    while operators:
        if operators[-1] in ("(", ")"):
            return ERROR
        _apply(operators.pop(), numbers)

    if not numbers:
        return ERROR
    return _format_number(numbers.pop())


class Calculator:
    """Display and expression state driven by key presses."""

    def __init__(self) -> None:
        self.display = "0"
        self.expression = ""
        self._operation_set = False

    def _flush_display(self) -> None:
        if self.display != "0":
            self.expression += " " + self.display
            self.display = "0"

    def _separate(self) -> None:
        if self.expression and not self.expression.endswith(" "):
            self.expression += " "

    def append_number(self, number: str) -> None:
        if self.display == "0" or self._operation_set:
            self.display = number
            self._operation_set = False
        else:
            self.display += number

    def append_operation(self, operation: str) -> None:
        self._flush_display()
        if self.expression and not self.expression.endswith(" "):
            self.expression += " " + operation + " "
        else:
            self.expression += operation + " "
        self._operation_set = True

    def append_to_expression(self, text: str) -> None:
        if text in ("(", "√", "²"):
            self._separate()
        elif text in (")", "%"):
            self._flush_display()
            self._separate()
        self.expression += text

    def calculate(self) -> None:
        if not self.expression:
            return
        self._flush_display()
        result = evaluate_expression(self.expression)
        self.display = result
        self.expression += " = " + result

    def clear(self) -> None:
        self.display = "0"

    def clear_all(self) -> None:
        self.display = "0"
        self.expression = ""
        self._operation_set = False

    def toggle_sign(self) -> None:
        number = _parse_number(self.display) or 0.0
        self.display = _format_number(-number)
        self.expression = "±(" + _format_number(number) + ") = " + self.display

    def backspace(self) -> None:
        if len(self.display) > 1:
            self.display = self.display[:-1]
        else:
            self.display = "0"
        if self.expression:
            self.expression = self.expression[:-1]