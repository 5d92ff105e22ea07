from __future__ import annotations

import logging

from kappa.errors import KappaError
from kappa.reader.grammar import parse_program
from kappa.evaluation.evaluator import interpret_many
from kappa.types.environment import Environment
from kappa.types.result import Err, Ok, Result
from kappa.types.values import Value
from kappa.builtin.env_builtin import default_environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Parses and evaluates kappa programs.
    Declarations made by one call to `eval` stay visible to the next.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else default_environment()

    def eval(self, code: str) -> Result[list[Value], KappaError]:
        """Run every top-level expression in `code`, returning their values.

        On the first error nothing is kept: the environment is left as it was
        before the call.
        """
        parsed = parse_program(code)
        if isinstance(parsed, Err):
            return parsed
        logger.debug("AST: %s", parsed.value)

        result = interpret_many(self.env, parsed.value)
        if isinstance(result, Err):
            return result
        self.env, values = result.value
        return Ok(values)
