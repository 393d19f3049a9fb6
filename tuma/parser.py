from typing import Dict, Optional, Sequence, Type

import tuma.ast as ast
from tuma.lexer import Token, TokenType, Lexer, Position
from tuma.token_stream import TokenStream, UnexpectedToken, describe

# Largest value of a signed 32-bit integer literal
MAX_LITERAL = 2 ** 31 - 1


class ParseError(Exception):
    """Syntactic error."""

    def __init__(self, message: str, reason: Optional[UnexpectedToken] = None, token: Optional[Token] = None) -> None:
        super().__init__(f"{message}: {reason}" if reason is not None else message)
        self.message: str = message
        self.reason: Optional[UnexpectedToken] = reason
        # The token the parser failed on
        self.token: Token = token or reason.actual

    @property
    def pos(self) -> Position:
        return self.token.pos


class Parser:
    """
    Grammar:
        program = statement*
        statement = assign | expr
        assign = 'let' name '=' expr ';'
        expr = binary_expr
        binary_expr[prio=n] = binary_arg[prio=n] ( '<binary_operator[prio=n]>' binary_arg[prio=n] )*
        binary_arg[prio=n] = binary_expr[prio=n+1] | atom
        atom = '(' expr ')' | number | name
    """

    # Binary operators from the lowest priority to the highest
    BINARY_OPERATORS = (
        (TokenType.PLUS, TokenType.MINUS),
        (TokenType.MUL,),
    )

    OPERATOR_NODES: Dict[TokenType, Type[ast.BinaryOperator]] = {
        TokenType.PLUS: ast.Add,
        TokenType.MINUS: ast.Sub,
        TokenType.MUL: ast.Mul,
    }

    # Tokens which may start an expression
    ATOM_START = (TokenType.OPEN_BRACKET, TokenType.NUMBER, TokenType.NAME)

    def program(self, tokens: TokenStream) -> ast.Program:
        """
        program = statement*
        """
        statements = []
        start = tokens.current.pos
        while not tokens.match(TokenType.END):
            if not tokens.match((TokenType.LET, *self.ATOM_START)):
                reason = UnexpectedToken(tokens.current, (TokenType.LET, *self.ATOM_START, TokenType.END))
                raise ParseError("Cannot parse statement", reason=reason)
            statement = self.statement(tokens)
            statements.append(statement)
        return ast.Program(statements, pos=start)

    def statement(self, tokens: TokenStream) -> ast.Statement:
        """
        statement = assign | expr
        """
        if tokens.match(TokenType.LET):
            return self.assign(tokens)
        start = tokens.current.pos
        return ast.ExprStatement(self.expr(tokens), pos=start)

    def assign(self, tokens: TokenStream) -> ast.Assignment:
        """
        assign = 'let' name '=' expr ';'
        """
        try:
            start = tokens.current.pos
            tokens.take(TokenType.LET)
            name = tokens.take(TokenType.NAME)
            tokens.take(TokenType.ASSIGN)
            value = self.expr(tokens)
            tokens.take(TokenType.SEMICOLON)
            return ast.Assignment(ast.Ident(name.text, pos=name.pos), value, pos=start)
        except UnexpectedToken as e:
            raise ParseError("Cannot parse assignment", reason=e)

    def expr(self, tokens: TokenStream) -> ast.Expr:
        """
        expr = binary_expr
        """
        return self.binary_expr(tokens)

    def binary_expr(self, tokens: TokenStream, priority: int = 0) -> ast.Expr:
        """
        binary_expr[prio=n] = binary_arg[prio=n] ( '<binary_operator[prio=n]>' binary_arg[prio=n] )*
        """
        start = tokens.current.pos
        expr = self.binary_arg(tokens, priority)
        while tokens.match(self.BINARY_OPERATORS[priority]):
            operator = tokens.take(self.BINARY_OPERATORS[priority])
            right_arg = self.binary_arg(tokens, priority)
            expr = self.OPERATOR_NODES[operator.type](expr, right_arg, pos=start)
        return expr

    def binary_arg(self, tokens: TokenStream, priority: int = 0) -> ast.Expr:
        """
        binary_arg[prio=n] = binary_expr[prio=n+1] | atom
        """
        if priority + 1 < len(self.BINARY_OPERATORS):
            return self.binary_expr(tokens, priority + 1)
        return self.atom(tokens)

    def atom(self, tokens: TokenStream) -> ast.Expr:
        """
        atom = '(' expr ')' | number | name
        """
        try:
            if tokens.match(TokenType.OPEN_BRACKET):
                start = tokens.take(TokenType.OPEN_BRACKET).pos
                expr = self.expr(tokens)
                tokens.take(TokenType.CLOSE_BRACKET)
                return ast.Parenthesized(expr, pos=start)
            elif tokens.match(TokenType.NUMBER):
                return self.number(tokens)
            elif tokens.match(TokenType.NAME):
                name = tokens.take(TokenType.NAME)
                return ast.Var(ast.Ident(name.text, pos=name.pos), pos=name.pos)
            else:
                raise UnexpectedToken(tokens.current, self.ATOM_START)
        except UnexpectedToken as e:
            raise ParseError("Cannot parse expression", reason=e)

    @staticmethod
    def number(tokens: TokenStream) -> ast.Number:
        """
        number = [0-9]+
        """
        token = tokens.take(TokenType.NUMBER)
        value = int(token.text)
        if value > MAX_LITERAL:
            reason = UnexpectedToken(token, TokenType.NUMBER)
            raise ParseError(f"Integer literal {token.text} exceeds {MAX_LITERAL}", reason=reason)
        return ast.Number(value, pos=token.pos)

    def parse(self, tokens: Sequence[Token]) -> ast.Program:
        ignore = (TokenType.SPACE, TokenType.NEW_LINE)
        stream = TokenStream(token for token in tokens if token.type not in ignore)
        try:
            return self.program(stream)
        except RecursionError:
            raise ParseError(f"Expression nesting too deep at {describe(stream.current)}", token=stream.current)


def parse(text: str, file: str = "<code>") -> ast.Program:
    """Convert source text to the syntax tree."""
    return Parser().parse(Lexer().tokens(text, file))
