"""
Tests for KMP and Rabin-Karp profile search
"""

import random

import pytest

from netanalyzer.social_network.models import UserProfile
from netanalyzer.social_network.string_search import StringSearch, PRIME, ALPHABET_SIZE
from netanalyzer.social_network.exceptions import InvalidSearchAlgorithmError

ENGINES = [StringSearch.kmp_search, StringSearch.rabin_karp_search]


class TestPatternEngines:
    """Test cases shared by both matching engines"""

    @pytest.mark.parametrize("engine", ENGINES)
    def test_basic_matches(self, engine):
        assert engine("abracadabra", "abra") == [0, 7]
        assert engine("hello world", "world") == [6]
        assert engine("hello world", "xyz") == []

    @pytest.mark.parametrize("engine", ENGINES)
    def test_overlapping_matches(self, engine):
        assert engine("aaaa", "aa") == [0, 1, 2]
        assert engine("abababa", "aba") == [0, 2, 4]

    @pytest.mark.parametrize("engine", ENGINES)
    def test_degenerate_inputs(self, engine):
        assert engine("", "a") == []
        assert engine("abc", "") == []
        assert engine("", "") == []
        assert engine("ab", "abc") == []

    @pytest.mark.parametrize("engine", ENGINES)
    def test_whole_text_match(self, engine):
        assert engine("chess", "chess") == [0]

    @pytest.mark.parametrize("engine", ENGINES)
    def test_case_sensitive(self, engine):
        assert engine("New York", "york") == []
        assert engine("New York", "York") == [4]

    def test_engines_agree_on_random_ascii(self):
        rng = random.Random(1234)
        for _ in range(300):
            text = "".join(rng.choice("abc") for _ in range(rng.randint(0, 40)))
            pattern = "".join(rng.choice("abc") for _ in range(rng.randint(0, 5)))
            assert StringSearch.kmp_search(text, pattern) == StringSearch.rabin_karp_search(text, pattern)

    def test_rabin_karp_confirms_hash_collisions(self):
        """Windows whose hash equals the pattern hash are not reported unless they match"""
        def hash_of(s):
            h = 0
            for ch in s:
                h = (h * ALPHABET_SIZE + ord(ch)) % PRIME
            return h

        pattern = "ab"
        target = hash_of(pattern)
        colliding = next(
            a + b
            for a in map(chr, range(32, 127))
            for b in map(chr, range(32, 127))
            if a + b != pattern and hash_of(a + b) == target
        )

        assert StringSearch.rabin_karp_search(colliding, pattern) == []
        assert StringSearch.rabin_karp_search(colliding + pattern, pattern) == [2]


class TestFailureTable:
    """Test cases for the KMP prefix-suffix table"""

    def test_compute_lps(self):
        assert StringSearch.compute_lps("aabaaab") == [0, 1, 0, 1, 2, 2, 3]
        assert StringSearch.compute_lps("abcd") == [0, 0, 0, 0]
        assert StringSearch.compute_lps("aaaa") == [0, 1, 2, 3]
        assert StringSearch.compute_lps("") == []


class TestSearchDispatch:
    """Test cases for selecting an engine by name"""

    def test_search_by_name(self):
        assert StringSearch.search("abracadabra", "abra", "kmp") == [0, 7]
        assert StringSearch.search("abracadabra", "abra", "rabin_karp") == [0, 7]

    def test_unknown_algorithm(self):
        with pytest.raises(InvalidSearchAlgorithmError):
            StringSearch.search("text", "t", "boyer_moore")


class TestProfileSearch:
    """Test cases for searching user profile collections"""

    def setup_method(self):
        self.users = [
            UserProfile(id="1", name="Alice Smith", location="New York",
                        interests=["hiking", "photography"], profile_data={"occupation": "Engineer"}),
            UserProfile(id="2", name="Bob Johnson", location="Los Angeles",
                        interests=["surfing", "hiking trips"], profile_data={"occupation": "Designer"}),
            UserProfile(id="3", name="Carol Smithers", location="York",
                        interests=["chess"]),
        ]

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_search_by_name(self, algorithm):
        results = StringSearch.search_users_by_name(self.users, "Smith", algorithm)

        assert [u.id for u in results] == ["1", "3"]

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_search_by_location(self, algorithm):
        results = StringSearch.search_users_by_location(self.users, "York", algorithm)

        assert [u.id for u in results] == ["1", "3"]

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_search_by_interest_lists_user_once(self, algorithm):
        results = StringSearch.search_users_by_interest(self.users, "hik", algorithm)

        assert [u.id for u in results] == ["1", "2"]

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_search_by_profile_data(self, algorithm):
        results = StringSearch.search_users_by_profile_data(self.users, "occupation", "Engineer", algorithm)

        assert [u.id for u in results] == ["1"]

    def test_search_by_profile_data_missing_key(self):
        assert StringSearch.search_users_by_profile_data(self.users, "school", "") == []
        assert StringSearch.search_users_by_profile_data(self.users, "school", "x") == []

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_ignore_case(self, algorithm):
        assert StringSearch.search_users_by_name(self.users, "alice", algorithm) == []

        results = StringSearch.search_users_by_name(self.users, "alice", algorithm, ignore_case=True)
        assert [u.id for u in results] == ["1"]

    def test_empty_pattern_matches_nothing(self):
        assert StringSearch.search_users_by_name(self.users, "") == []

    def test_accepts_any_iterable(self):
        results = StringSearch.search_users_by_location(iter(self.users), "Angeles")

        assert [u.id for u in results] == ["2"]

    def test_unknown_algorithm(self):
        with pytest.raises(InvalidSearchAlgorithmError):
            StringSearch.search_users_by_name(self.users, "Alice", "naive")
