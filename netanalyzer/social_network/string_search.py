"""
String Search for User Profiles

Exact substring search with two interchangeable engines:
- KMP (Knuth-Morris-Pratt) driven by a longest-proper-prefix-suffix table
- Rabin-Karp driven by a rolling polynomial hash

Both engines are case-sensitive and report every start offset, overlapping
matches included. The profile search helpers can lower-case text and pattern
before running either engine.
"""

from typing import Callable, Dict, Iterable, List

from .models import UserProfile
from .exceptions import InvalidSearchAlgorithmError

PRIME = 101
ALPHABET_SIZE = 256

KMP = "kmp"
RABIN_KARP = "rabin_karp"


class StringSearch:
    """Substring search over text and over collections of user profiles"""

    @staticmethod
    def compute_lps(pattern: str) -> List[int]:
        """lps[i] is the length of the longest proper prefix of pattern[:i + 1]
        that is also a suffix of it"""
        lps = [0] * len(pattern)
        length = 0
        i = 1

        while i < len(pattern):
            if pattern[i] == pattern[length]:
                length += 1
                lps[i] = length
                i += 1
            elif length != 0:
                length = lps[length - 1]
            else:
                lps[i] = 0
                i += 1

        return lps

    @staticmethod
    def kmp_search(text: str, pattern: str) -> List[int]:
        """Start offsets of every occurrence of pattern in text"""
        positions: List[int] = []
        if not pattern or not text:
            return positions

        lps = StringSearch.compute_lps(pattern)
        m = len(pattern)
        j = 0

        for i, char in enumerate(text):
            while j > 0 and char != pattern[j]:
                j = lps[j - 1]
            if char == pattern[j]:
                j += 1
            if j == m:
                positions.append(i - m + 1)
                j = lps[j - 1]

        return positions

    @staticmethod
    def rabin_karp_search(text: str, pattern: str) -> List[int]:
        """Start offsets of every occurrence of pattern in text.

        A hash hit is only reported after a direct comparison of the window,
        since a modulus of 101 collides often.
        """
        positions: List[int] = []
        n, m = len(text), len(pattern)
        if not pattern or not text or m > n:
            return positions

        # Weight of the leading character of a window: ALPHABET_SIZE^(m-1) mod PRIME
        high = pow(ALPHABET_SIZE, m - 1, PRIME)

        pattern_hash = 0
        window_hash = 0
        for i in range(m):
            pattern_hash = (ALPHABET_SIZE * pattern_hash + ord(pattern[i])) % PRIME
            window_hash = (ALPHABET_SIZE * window_hash + ord(text[i])) % PRIME

        for i in range(n - m + 1):
            if pattern_hash == window_hash and text[i:i + m] == pattern:
                positions.append(i)

            if i < n - m:
                window_hash = (ALPHABET_SIZE * (window_hash - ord(text[i]) * high) + ord(text[i + m])) % PRIME

        return positions

    @staticmethod
    def get_engine(algorithm: str) -> Callable[[str, str], List[int]]:
        engines: Dict[str, Callable[[str, str], List[int]]] = {
            KMP: StringSearch.kmp_search,
            RABIN_KARP: StringSearch.rabin_karp_search,
        }
        try:
            return engines[algorithm]
        except KeyError:
            raise InvalidSearchAlgorithmError(algorithm) from None

    @staticmethod
    def search(text: str, pattern: str, algorithm: str = KMP) -> List[int]:
        """Run the named engine ("kmp" or "rabin_karp")"""
        return StringSearch.get_engine(algorithm)(text, pattern)

    @staticmethod
    def _matcher(pattern: str, algorithm: str, ignore_case: bool) -> Callable[[str], bool]:
        engine = StringSearch.get_engine(algorithm)
        if ignore_case:
            pattern = pattern.lower()

        def matches(text: str) -> bool:
            if ignore_case:
                text = text.lower()
            return bool(engine(text, pattern))

        return matches

    @staticmethod
    def search_users_by_name(users: Iterable[UserProfile], pattern: str,
                             algorithm: str = KMP, ignore_case: bool = False) -> List[UserProfile]:
        matches = StringSearch._matcher(pattern, algorithm, ignore_case)
        return [user for user in users if matches(user.name)]

    @staticmethod
    def search_users_by_location(users: Iterable[UserProfile], pattern: str,
                                 algorithm: str = KMP, ignore_case: bool = False) -> List[UserProfile]:
        matches = StringSearch._matcher(pattern, algorithm, ignore_case)
        return [user for user in users if matches(user.location)]

    @staticmethod
    def search_users_by_interest(users: Iterable[UserProfile], pattern: str,
                                 algorithm: str = KMP, ignore_case: bool = False) -> List[UserProfile]:
        """Users with at least one matching interest, each listed once"""
        matches = StringSearch._matcher(pattern, algorithm, ignore_case)
        return [user for user in users if any(matches(interest) for interest in user.interests)]

    @staticmethod
    def search_users_by_profile_data(users: Iterable[UserProfile], key: str, pattern: str,
                                     algorithm: str = KMP, ignore_case: bool = False) -> List[UserProfile]:
        """Users whose profile_data[key] matches; users without the key are skipped"""
        matches = StringSearch._matcher(pattern, algorithm, ignore_case)
        return [
            user for user in users
            if user.has_profile_data(key) and matches(user.get_profile_data(key))
        ]
