"""
Canonical keys for grouping template and function instantiations.
"""

import re


class NameCanonicalizer:
    """Strips template-argument and parameter lists so instantiations group together."""

    def __init__(self):
        """Initialize patterns for the tokens that must survive stripping."""
        self.operator_pattern = re.compile(
            r'operator(?:\s*(?:\(\)|\[\]|<=>|<<=|>>=|<<|>>|->\*?|&&|\|\||\+\+|--|[<>=!+\-*/%^&|~,]=?))?'
        )

    @staticmethod
    def _matching_close(name: str, start: int) -> int:
        """Index of the bracket closing the one at `start`, or -1 when unbalanced."""
        depth = 0
        for i in range(start, len(name)):
            ch = name[i]
            if ch in '<(':
                depth += 1
            elif ch in '>)':
                depth -= 1
                if depth == 0:
                    return i
        return -1

    @staticmethod
    def _has_unmatched_close(name: str, start: int) -> bool:
        """Whether a '>' or ')' after `start` closes a bracket opened before it."""
        depth = 0
        for ch in name[start:]:
            if ch in '<(':
                depth += 1
            elif ch in '>)':
                depth -= 1
                if depth < 0:
                    return True
        return False

    def canonicalize(self, name: str) -> str:
        """
        Cut a name at its first argument list.

        Examples:
            "Foo<int>"                          -> "Foo"
            "std::vector<int>::push_back(int)"  -> "std::vector"
            "(anonymous namespace)::bar<T>"     -> "(anonymous namespace)::bar"
            "Foo::operator()(int)"              -> "Foo::operator()"
            "Foo::operator<<int>"               -> "Foo::operator<"

        Args:
            name: Full detail name of an instantiation or function

        Returns:
            Canonical key; the full name when stripping would leave nothing
        """
        if not name:
            return name

        i = 0
        length = len(name)
        while i < length:
            ch = name[i]
            if ch == 'o':
                match = self.operator_pattern.match(name, i)
                if match and (i == 0 or not (name[i - 1].isalnum() or name[i - 1] == '_')):
                    end = match.end()
                    # "operator<<int>" is operator< with template arguments, not operator<<
                    if name[end - 1:end] == '<' and end - i > len('operator<') \
                            and self._has_unmatched_close(name, end):
                        end -= 1
                    i = end
                    continue
            if ch in '<(':
                close = self._matching_close(name, i)
                # Parenthesized scopes such as "(anonymous namespace)::" are part of the name
                if ch == '(' and close != -1 and name.startswith('::', close + 1):
                    i = close + 3
                    continue
                key = name[:i].rstrip()
                return key if key else name
            i += 1

        return name
