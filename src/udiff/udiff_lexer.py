"""Lexer that splits unified diff text into classified line tokens."""

from typing import List

from udiff.udiff_token import UDiffToken, UDiffTokenType


class UDiffLexer:
    """
    Lexes unified diff text into one token per line.

    Lines are split on '\\n' only, so carriage returns and any other control
    characters stay inside the token value and survive a round trip.  Each
    line is classified purely by its leading characters; the lexer never
    looks at neighbouring lines.
    """

    # Checked in order, so longer prefixes must come before their single-character forms
    _PREFIXES = (
        ("diff --git ", UDiffTokenType.GIT_HEADER),
        ("--- ", UDiffTokenType.OLD_FILE),
        ("+++ ", UDiffTokenType.NEW_FILE),
        ("@@ ", UDiffTokenType.HUNK_HEADER),
        (" ", UDiffTokenType.CONTEXT),
        ("+", UDiffTokenType.ADDED),
        ("-", UDiffTokenType.REMOVED),
        ("\\", UDiffTokenType.NO_NEWLINE),
    )

    def lex(self, diff_text: str) -> List[UDiffToken]:
        """
        Lex diff text into line tokens.

        Args:
            diff_text: The complete diff text

        Returns:
            List of tokens, one per line, in input order
        """
        tokens: List[UDiffToken] = []
        position = 0
        line = 1
        text_len = len(diff_text)

        while position < text_len:
            end = diff_text.find('\n', position)
            end = text_len if end == -1 else end + 1

            value = diff_text[position:end]
            tokens.append(UDiffToken(self._classify(value), value, position, line))

            position = end
            line += 1

        return tokens

    def _classify(self, value: str) -> UDiffTokenType:
        """
        Work out the shape of a single line.

        Args:
            value: The line, including any terminator

        Returns:
            The token type for the line
        """
        for prefix, token_type in self._PREFIXES:
            if value.startswith(prefix):
                return token_type

        if value in ('\n', '\r\n'):
            return UDiffTokenType.EMPTY

        return UDiffTokenType.TEXT
