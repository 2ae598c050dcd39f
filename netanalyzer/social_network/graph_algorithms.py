"""
Graph Algorithms for Social Network Analysis

This module provides graph algorithms for analyzing social networks including:
- Breadth-first and depth-first traversal
- Friend recommendations (friends of friends)
- All-pairs shortest paths (Floyd-Warshall)
- Community detection with union-find
"""

from typing import List, Dict, Optional, Callable, Union
from collections import deque

from .models import SocialGraph, Edge, INFINITY
from .union_find import DisjointSet
from .exceptions import UnknownUserError

Distance = Union[int, float]
WeightFunction = Callable[[str, str], int]

DEFAULT_EDGE_WEIGHT = 1


class GraphAlgorithms:
    """Collection of graph algorithms for social network analysis.

    The graph is only read, never mutated.
    """

    def __init__(self, graph: SocialGraph):
        self.graph = graph

    def _require_user(self, user_id: str):
        if not self.graph.has_user(user_id):
            raise UnknownUserError(user_id)

    def bfs(self, start: str) -> List[str]:
        """Breadth-first order of every user reachable from start"""
        self._require_user(start)

        result = []
        visited = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            result.append(current)

            for neighbor in self.graph.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        return result

    def dfs(self, start: str) -> List[str]:
        """Depth-first preorder of every user reachable from start.

        Neighbors are pushed in reverse so they are popped in stored order,
        which gives the same sequence as the recursive formulation.
        """
        self._require_user(start)

        result = []
        visited = set()
        stack = [start]

        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            result.append(current)

            for neighbor in reversed(self.graph.neighbors(current)):
                if neighbor not in visited:
                    stack.append(neighbor)

        return result

    def friend_recommendations(self, user_id: str, depth: int = 2) -> List[str]:
        """Users within depth hops of user_id that are not already friends"""
        self._require_user(user_id)

        recommendations = []
        visited = {user_id}
        queue = deque([(user_id, 0)])

        while queue:
            current, current_depth = queue.popleft()
            if current_depth >= depth:
                continue

            for neighbor in self.graph.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, current_depth + 1))
                    # Direct friends are discovered from the start user itself
                    if current_depth > 0:
                        recommendations.append(neighbor)

        return recommendations

    def floyd_warshall(self) -> List[List[Distance]]:
        """All-pairs shortest path lengths, indexed in get_users() order"""
        dist = self.graph.get_adjacency_matrix()
        n = len(dist)

        for k in range(n):
            row_k = dist[k]
            for i in range(n):
                row_i = dist[i]
                d_ik = row_i[k]
                if d_ik == INFINITY:
                    continue
                for j in range(n):
                    d_kj = row_k[j]
                    if d_kj != INFINITY and d_ik + d_kj < row_i[j]:
                        row_i[j] = d_ik + d_kj

        return dist

    def shortest_path_lengths(self) -> Dict[str, Dict[str, Optional[int]]]:
        """Floyd-Warshall result keyed by user id, None for unreachable pairs"""
        users = self.graph.get_users()
        dist = self.floyd_warshall()

        result = {}
        for i, source in enumerate(users):
            result[source] = {}
            for j, target in enumerate(users):
                d = dist[i][j]
                result[source][target] = None if d == INFINITY else int(d)

        return result

    def get_all_edges(self, weight_fn: Optional[WeightFunction] = None) -> List[Edge]:
        """Each undirected connection once, as (smaller id, larger id, weight)"""
        edges = []
        seen = set()

        for user_id in self.graph.get_users():
            for neighbor in self.graph.neighbors(user_id):
                if user_id < neighbor and (user_id, neighbor) not in seen:
                    seen.add((user_id, neighbor))
                    weight = weight_fn(user_id, neighbor) if weight_fn else DEFAULT_EDGE_WEIGHT
                    edges.append(Edge(user_id, neighbor, weight))

        return edges

    def detect_communities(self, threshold: int, weight_fn: Optional[WeightFunction] = None) -> List[List[str]]:
        """Partition users by union-find over edges with weight <= threshold.

        Edges are considered lightest first. The order of communities, and of
        members inside a community, is not part of the result contract.
        """
        edges = sorted(self.get_all_edges(weight_fn), key=lambda edge: edge.weight)
        users = self.graph.get_users()
        disjoint_set = DisjointSet(len(users))

        for edge in edges:
            if edge.weight > threshold:
                continue
            u = self.graph.index_of(edge.user1)
            v = self.graph.index_of(edge.user2)
            if not disjoint_set.connected(u, v):
                disjoint_set.union(u, v)

        return [
            [users[index] for index in members]
            for members in disjoint_set.groups().values()
        ]
