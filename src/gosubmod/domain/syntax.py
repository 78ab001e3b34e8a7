"""go.mod syntax tree: lexer, parser, printer.

The tree keeps comments and layout so that rewriting a manifest touches
only the directives that changed.  A file is a list of statements:

- :class:`Line`: ``verb arg...`` on one line, or a member of a block.
- :class:`LineBlock`: ``verb (`` ... ``)`` grouping several lines.
- :class:`CommentBlock`: comments separated from any directive by a
  blank line.

Full-line comments attach to the directive that follows them; a comment
on the same line is that directive's suffix.  Inside a block, a blank
line is recorded as an empty ``before`` comment.

Printing is canonical: one blank line between top-level statements,
block members indented with a tab, suffix comments after one space.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gosubmod.domain.errors import ManifestParseError

_PUNCT = frozenset("()[],")
_BAD_IDENT = frozenset("{}")


@dataclass(eq=False)
class Comments:
    """Comments attached to a statement."""

    before: list[str] = field(default_factory=list)
    suffix: str = ""


@dataclass(eq=False)
class Line:
    """A single directive line.

    Lines inside a block omit the block's verb from ``tokens``.
    """

    tokens: list[str]
    comments: Comments = field(default_factory=Comments)
    start: int = 0
    in_block: bool = False
    removed: bool = False


@dataclass(eq=False)
class LineBlock:
    """A parenthesised block of lines sharing a verb."""

    tokens: list[str]
    lines: list[Line] = field(default_factory=list)
    comments: Comments = field(default_factory=Comments)
    close_comments: list[str] = field(default_factory=list)
    close_suffix: str = ""
    start: int = 0


@dataclass(eq=False)
class CommentBlock:
    """Free-standing comments."""

    comments: Comments = field(default_factory=Comments)
    start: int = 0


Stmt = Line | LineBlock | CommentBlock


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------


def _lex_line(filename: str, lineno: int, text: str) -> tuple[list[str], str]:
    """Split one physical line into ``(tokens, comment)``."""
    tokens: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in " \t\r":
            i += 1
            continue
        if text.startswith("//", i):
            return tokens, text[i:].rstrip()
        if text.startswith("/*", i):
            raise ManifestParseError(
                filename, lineno, "mod files must use // comments, not /* */ comments"
            )
        if ch in _PUNCT:
            tokens.append(ch)
            i += 1
            continue
        if ch in ('"', "`"):
            end = i + 1
            while end < n and text[end] != ch:
                if ch == '"' and text[end] == "\\":
                    end += 1
                end += 1
            if end >= n:
                raise ManifestParseError(filename, lineno, "unexpected newline in string")
            tokens.append(text[i : end + 1])
            i = end + 1
            continue
        if ch in _BAD_IDENT or not ch.isprintable():
            raise ManifestParseError(filename, lineno, f"unexpected input character {ch!r}")
        start = i
        while i < n:
            ch = text[i]
            if ch.isspace() or ch in _PUNCT or ch in _BAD_IDENT or text.startswith("//", i):
                break
            if text.startswith("/*", i):
                raise ManifestParseError(
                    filename, lineno, "mod files must use // comments, not /* */ comments"
                )
            i += 1
        tokens.append(text[start:i])
    return tokens, ""


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class FileSyntax:
    """Parsed go.mod file."""

    name: str = ""
    stmts: list[Stmt] = field(default_factory=list)

    # -- editing -----------------------------------------------------------

    def add_line(self, hint: Line | LineBlock | None, *tokens: str) -> Line:
        """Add a directive line near *hint*.

        Without a hint the line goes after the last statement with the
        same verb (inside it, if that statement is a block), or at the end
        of the file.
        """
        if hint is None:
            for stmt in reversed(self.stmts):
                if isinstance(stmt, LineBlock) and stmt.tokens[:1] == [tokens[0]]:
                    hint = stmt
                    break
                if (
                    isinstance(stmt, Line)
                    and not stmt.removed
                    and stmt.tokens[:1] == [tokens[0]]
                ):
                    hint = stmt
                    break

        if isinstance(hint, LineBlock):
            new = Line(tokens=list(tokens[1:]), in_block=True)
            hint.lines.append(new)
            return new

        if isinstance(hint, Line):
            for i, stmt in enumerate(self.stmts):
                if stmt is hint:
                    new = Line(tokens=list(tokens))
                    self.stmts.insert(i + 1, new)
                    return new
                if isinstance(stmt, LineBlock):
                    for j, line in enumerate(stmt.lines):
                        if line is hint:
                            new = Line(tokens=list(tokens[1:]), in_block=True)
                            stmt.lines.insert(j + 1, new)
                            return new

        new = Line(tokens=list(tokens))
        self.stmts.append(new)
        return new

    def update_line(self, line: Line, *tokens: str) -> None:
        """Replace the tokens of *line* (``tokens`` includes the verb)."""
        line.tokens = list(tokens[1:]) if line.in_block else list(tokens)

    def remove_line(self, line: Line) -> None:
        """Mark *line* removed; :meth:`cleanup` drops it from the tree."""
        line.removed = True

    def cleanup(self) -> None:
        """Drop removed lines and empty blocks, collapse one-line blocks."""
        kept: list[Stmt] = []
        for stmt in self.stmts:
            if isinstance(stmt, Line):
                if stmt.removed:
                    continue
            elif isinstance(stmt, LineBlock):
                stmt.lines = [line for line in stmt.lines if not line.removed]
                if not stmt.lines:
                    continue
                if len(stmt.lines) == 1 and not stmt.close_comments:
                    kept.append(_collapse(stmt))
                    continue
            kept.append(stmt)
        self.stmts = kept

    # -- output ------------------------------------------------------------

    def format(self) -> str:
        """Print the tree in canonical form."""
        out: list[str] = []
        for i, stmt in enumerate(self.stmts):
            if i > 0:
                out.append("")
            if isinstance(stmt, CommentBlock):
                out.extend(c for c in stmt.comments.before if c)
            elif isinstance(stmt, Line):
                out.extend(c for c in stmt.comments.before if c)
                out.append(_line_text(stmt.tokens, stmt.comments.suffix))
            else:
                out.extend(_block_lines(stmt))
        if not out:
            return ""
        return "\n".join(out) + "\n"


def _collapse(block: LineBlock) -> Line:
    """Turn a one-line block into that line, reusing the Line object."""
    line = block.lines[0]
    before = list(block.comments.before) + [c for c in line.comments.before if c]
    suffix = line.comments.suffix
    if block.comments.suffix:
        if suffix:
            before.append(block.comments.suffix)
        else:
            suffix = block.comments.suffix
    line.tokens = block.tokens + line.tokens
    line.comments = Comments(before=before, suffix=suffix)
    line.in_block = False
    line.start = block.start
    return line


def _join_tokens(tokens: list[str]) -> str:
    parts: list[str] = []
    sep = ""
    for tok in tokens:
        if tok in (",", ")", "]"):
            sep = ""
        parts.append(sep + tok)
        sep = "" if tok in ("(", "[") else " "
    return "".join(parts)


def _line_text(tokens: list[str], suffix: str, indent: str = "") -> str:
    text = indent + _join_tokens(tokens)
    if suffix:
        text = f"{text} {suffix}" if tokens else indent + suffix
    return text


def _comment_lines(
    comments: list[str], indent: str, *, leading_blank: bool, trailing_blank: bool
) -> list[str]:
    """Render comment lines, keeping at most one blank line in a row."""
    out: list[str] = []
    blank = False
    for comment in comments:
        if not comment:
            blank = True
            continue
        if blank and (out or leading_blank):
            out.append("")
        blank = False
        out.append(indent + comment)
    if blank and trailing_blank and (out or leading_blank):
        out.append("")
    return out


def _block_lines(block: LineBlock) -> list[str]:
    out = [c for c in block.comments.before if c]
    out.append(_line_text([*block.tokens, "("], block.comments.suffix))
    for i, line in enumerate(block.lines):
        out.extend(
            _comment_lines(line.comments.before, "\t", leading_blank=i > 0, trailing_blank=True)
        )
        out.append(_line_text(line.tokens, line.comments.suffix, "\t"))
    out.extend(
        _comment_lines(
            block.close_comments, "\t", leading_blank=bool(block.lines), trailing_blank=False
        )
    )
    out.append(_line_text([")"], block.close_suffix))
    return out


def parse_syntax(filename: str, text: str) -> FileSyntax:
    """Parse go.mod *text* into a :class:`FileSyntax`.

    Raises:
        ManifestParseError: on lexical errors or an unterminated block.
    """
    syntax = FileSyntax(name=filename)
    pending: list[str] = []
    block: LineBlock | None = None
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for lineno, raw in enumerate(lines, start=1):
        tokens, comment = _lex_line(filename, lineno, raw)

        if block is not None:
            if not tokens:
                pending.append(comment)
                continue
            if tokens == [")"]:
                block.close_comments = pending
                block.close_suffix = comment
                pending = []
                block = None
                continue
            block.lines.append(
                Line(
                    tokens=tokens,
                    comments=Comments(before=pending, suffix=comment),
                    start=lineno,
                    in_block=True,
                )
            )
            pending = []
            continue

        if not tokens:
            if comment:
                pending.append(comment)
            elif pending:
                syntax.stmts.append(CommentBlock(comments=Comments(before=pending), start=lineno))
                pending = []
            continue

        comments = Comments(before=pending, suffix=comment)
        pending = []
        if len(tokens) >= 2 and tokens[-1] == "(":
            block = LineBlock(tokens=tokens[:-1], comments=comments, start=lineno)
            syntax.stmts.append(block)
        elif len(tokens) >= 3 and tokens[-2:] == ["(", ")"]:
            syntax.stmts.append(LineBlock(tokens=tokens[:-2], comments=comments, start=lineno))
        else:
            syntax.stmts.append(Line(tokens=tokens, comments=comments, start=lineno))

    if block is not None:
        raise ManifestParseError(filename, len(lines) + 1, "unexpected EOF: unterminated block")
    if pending:
        syntax.stmts.append(CommentBlock(comments=Comments(before=pending), start=len(lines)))
    return syntax
