"""
Social Network Analysis Module for netanalyzer

This module provides the social network core:
- A user graph kept as an adjacency list and an adjacency matrix
- Traversal, friend recommendations and all-pairs shortest paths
- Union-find community detection
- KMP and Rabin-Karp search over user profiles
- JSON and CSV loading and saving
"""

from .models import UserProfile, Edge, UserRegistry, SocialGraph, INFINITY
from .graph_algorithms import GraphAlgorithms
from .union_find import DisjointSet
from .string_search import StringSearch
from .parser import NetworkParser
from .exceptions import (
    SocialNetworkError,
    UnknownUserError,
    MalformedInputError,
    InvalidSearchAlgorithmError,
)

__all__ = [
    'UserProfile',
    'Edge',
    'UserRegistry',
    'SocialGraph',
    'INFINITY',
    'GraphAlgorithms',
    'DisjointSet',
    'StringSearch',
    'NetworkParser',
    'SocialNetworkError',
    'UnknownUserError',
    'MalformedInputError',
    'InvalidSearchAlgorithmError'
]
