from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_input
from prompt_toolkit.output import create_output
from prompt_toolkit.styles import style_from_pygments_cls, Style
from pygments.styles.monokai import MonokaiStyle

import tuma.ast as ast
from tuma.evaluator import Evaluator
from tuma.lexer import Lexer, Position
from tuma.parser import Parser, ParseError
from tuma.prompt import PromptLexer, Prompt
from tuma.runtime import Environment, EvalError, UnboundVariable

logger = logging.getLogger(__name__)


def get_line(text: str, pos: Position) -> str:
    """Get the source line containing the position."""
    return text.split("\n")[pos.line].rstrip("\r")


class Interpreter:
    def __init__(self, lexer: Optional[Lexer] = None, parser: Optional[Parser] = None,
                 evaluator: Optional[Evaluator] = None):
        self._lexer: Lexer = lexer or Lexer()
        self._parser: Parser = parser or Parser()
        self._evaluator: Evaluator = evaluator or Evaluator()

    def parse_source(self, sources: str, filename: str) -> ast.Program:
        """Convert sources to the syntax tree."""
        tokens = self._lexer.tokens(sources, filename)
        program = self._parser.parse(tokens)
        logger.debug("Parsed %d statement(s) from %s", len(program.statements), filename)
        return program

    def run_source(self, sources: str, filename: str, env: Optional[Environment] = None) -> Optional[int]:
        """Parse and evaluate sources."""
        program = self.parse_source(sources, filename)
        value = self._evaluator.eval_program(program, env)
        logger.debug("Evaluated %s, result: %s", filename, value)
        return value

    @staticmethod
    def print_location(pos: Position, length: int, output: Optional[TextIO] = None, sources: Optional[str] = None):
        output = output or sys.stderr
        print(f"In file '{pos.file}', line {pos.line + 1}", file=output)
        if sources is not None:
            print("  " + get_line(sources, pos), file=output)
            print("  " + " " * pos.in_line + "^" * max(length, 1), file=output)

    @staticmethod
    def print_parse_error(error: ParseError, output: Optional[TextIO] = None, sources: Optional[str] = None):
        """Print syntactic error."""
        output = output or sys.stderr
        Interpreter.print_location(error.pos, len(error.token.text), output=output, sources=sources)
        print(f"Syntactic Error: {str(error)}", file=output)

    @staticmethod
    def print_eval_error(error: EvalError, output: Optional[TextIO] = None, sources: Optional[str] = None):
        """Print evaluation error."""
        output = output or sys.stderr
        if error.pos is not None:
            length = len(error.name) if isinstance(error, UnboundVariable) else 1
            Interpreter.print_location(error.pos, length, output=output, sources=sources)
        print(f"{type(error).__name__}: {str(error)}", file=output)

    def make_prompt(
            self,
            prompt_lexer: Optional[PromptLexer] = None,
            style: Optional[Style] = None,
            output: Optional[TextIO] = None,
            input: Optional[TextIO] = None,
    ) -> Prompt:
        """Make prompter function."""
        prompt_session = PromptSession(
            enable_history_search=True,
            lexer=prompt_lexer or PromptLexer(self._lexer),
            style=style or style_from_pygments_cls(MonokaiStyle),
            input=create_input(input),
            output=create_output(output),
        )
        return prompt_session.prompt

    def repl(self, prompt_text: str = "tuma> ", output: Optional[TextIO] = None, err_output: Optional[TextIO] = None,
             input: Optional[TextIO] = None, prompt: Optional[Prompt] = None):
        """Interactive loop, variables survive between commands."""
        env = Environment()
        prompt = prompt or self.make_prompt(input=input, output=output)
        command_count = 0
        while True:
            try:
                command = prompt(prompt_text)
            except (EOFError, KeyboardInterrupt):
                break

            command_key = f"<command:{command_count}>"
            command_count += 1
            try:
                value = self.run_source(command, command_key, env)
                if value is not None:
                    print(value, file=output)
            except ParseError as error:
                self.print_parse_error(error, output=err_output, sources=command)
            except EvalError as error:
                self.print_eval_error(error, output=err_output, sources=command)

    def exec_file(self, path: str, output: Optional[TextIO] = None, err_output: Optional[TextIO] = None):
        """Execute file and print its result."""
        try:
            with open(path, encoding="utf-8") as file:
                sources = file.read()
        except OSError as error:
            print(f"Cannot read file '{path}': {error.strerror or error}", file=err_output or sys.stderr)
            sys.exit(-1)
        try:
            value = self.run_source(sources, path)
        except ParseError as error:
            self.print_parse_error(error, output=err_output, sources=sources)
            sys.exit(-1)
        except EvalError as error:
            self.print_eval_error(error, output=err_output, sources=sources)
            sys.exit(-1)
        if value is not None:
            print(value, file=output)


def main(args: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(prog="tuma", description="Evaluate integer arithmetic programs.")
    parser.add_argument("file", help="program to run (if empty, starts interactive mode)", nargs="?")
    parser.add_argument("-v", "--verbose", help="print debug messages", action="store_true")
    args = parser.parse_args(args)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    interpreter = Interpreter()
    if args.file is None:
        interpreter.repl()
    else:
        interpreter.exec_file(args.file)


if __name__ == '__main__':
    main()
