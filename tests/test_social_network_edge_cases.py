"""
Edge Cases and Boundary Tests for Social Network Analysis

This module contains tests for edge cases, error conditions, and boundary scenarios
in the social network analysis system.
"""

import pytest

from netanalyzer.social_network.models import SocialGraph, UserProfile, INFINITY
from netanalyzer.social_network.graph_algorithms import GraphAlgorithms
from netanalyzer.social_network.string_search import StringSearch
from netanalyzer.social_network.exceptions import UnknownUserError, SocialNetworkError


class TestEdgeCasesGraph:
    """Edge cases for SocialGraph"""

    def test_empty_graph(self):
        graph = SocialGraph()
        algorithms = GraphAlgorithms(graph)

        assert graph.get_users() == []
        assert graph.get_adjacency_matrix() == []
        assert algorithms.floyd_warshall() == []
        assert algorithms.detect_communities(1) == []
        assert graph.get_network_stats()["most_connected_user"] is None
        assert graph.get_network_stats()["network_density"] == 0.0

    def test_unicode_identifiers(self):
        graph = SocialGraph()
        graph.add_connection("José", "Zoë")
        graph.add_connection("Zoë", "李雷")

        assert GraphAlgorithms(graph).bfs("José") == ["José", "Zoë", "李雷"]
        assert graph.are_connected("李雷", "Zoë")

    def test_remove_connection_with_unknown_users(self):
        graph = SocialGraph()
        graph.add_user("a")

        graph.remove_connection("a", "ghost")
        graph.remove_connection("ghost", "phantom")

        assert graph.get_users() == ["a"]

    def test_remove_self_connection_keeps_diagonal(self):
        graph = SocialGraph()
        graph.add_user("a")

        graph.remove_connection("a", "a")

        assert graph.get_adjacency_matrix() == [[0]]

    def test_readd_after_remove(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.remove_connection("a", "b")
        graph.add_connection("b", "a")

        assert graph.get_adjacency_list() == {"a": ["b"], "b": ["a"]}
        assert graph.get_adjacency_matrix() == [[0, 1], [1, 0]]

    def test_clear_resets_indices(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.clear()
        graph.add_user("z")

        assert graph.index_of("z") == 0
        assert graph.get_adjacency_matrix() == [[0]]

    def test_neighbors_of_unknown_user(self):
        with pytest.raises(UnknownUserError) as excinfo:
            SocialGraph().neighbors("ghost")

        assert excinfo.value.details["user_id"] == "ghost"
        assert isinstance(excinfo.value, KeyError)
        assert isinstance(excinfo.value, SocialNetworkError)


class TestEdgeCasesAlgorithms:
    """Edge cases for GraphAlgorithms"""

    def test_isolated_user(self):
        graph = SocialGraph()
        graph.add_user("solo")
        algorithms = GraphAlgorithms(graph)

        assert algorithms.bfs("solo") == ["solo"]
        assert algorithms.dfs("solo") == ["solo"]
        assert algorithms.friend_recommendations("solo") == []
        assert algorithms.detect_communities(1) == [["solo"]]

    def test_recommendations_depth_bounds(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.add_connection("b", "c")
        algorithms = GraphAlgorithms(graph)

        assert algorithms.friend_recommendations("a", 0) == []
        assert algorithms.friend_recommendations("a", 1) == []
        assert algorithms.friend_recommendations("a", 100) == ["c"]

    def test_disconnected_components_stay_infinite(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.add_connection("c", "d")

        dist = GraphAlgorithms(graph).floyd_warshall()

        assert dist[0][2] == INFINITY
        assert dist[3][1] == INFINITY
        assert dist[0][1] == 1

    def test_floyd_warshall_does_not_touch_graph(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.add_connection("b", "c")

        GraphAlgorithms(graph).floyd_warshall()

        assert graph.get_adjacency_matrix()[0][2] == INFINITY

    def test_shortest_path_lengths_mapping(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.add_user("z")

        lengths = GraphAlgorithms(graph).shortest_path_lengths()

        assert lengths["a"] == {"a": 0, "b": 1, "z": None}

    def test_communities_with_custom_weights(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")
        graph.add_connection("b", "c")
        heavy = {("b", "c")}

        communities = GraphAlgorithms(graph).detect_communities(
            1, weight_fn=lambda u, v: 5 if (u, v) in heavy else 1)

        assert sorted(sorted(c) for c in communities) == [["a", "b"], ["c"]]

    def test_negative_threshold_gives_singletons(self):
        graph = SocialGraph()
        graph.add_connection("a", "b")

        communities = GraphAlgorithms(graph).detect_communities(-1)

        assert sorted(communities) == [["a"], ["b"]]


class TestEdgeCasesSearch:
    """Edge cases for profile search"""

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_pattern_longer_than_every_field(self, algorithm):
        users = [UserProfile(id="1", name="Al")]

        assert StringSearch.search_users_by_name(users, "Albert Einstein", algorithm) == []

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_non_ascii_text(self, algorithm):
        users = [UserProfile(id="1", name="Zoë Ñúñez"), UserProfile(id="2", name="Zoe Nunez")]

        results = StringSearch.search_users_by_name(users, "Ñúñ", algorithm)

        assert [u.id for u in results] == ["1"]

    def test_empty_collection(self):
        assert StringSearch.search_users_by_interest([], "chess") == []

    def test_user_without_interests(self):
        assert StringSearch.search_users_by_interest([UserProfile(id="1")], "chess") == []
