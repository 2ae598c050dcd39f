"""
Social Network Data Models

This module defines the core data structures for social network analysis:
- UserProfile: Profile record for an individual in the social network
- Edge: Transient weighted connection used by community detection
- UserRegistry: Dense index assignment for user identifiers
- SocialGraph: Undirected graph kept as an adjacency list and an adjacency matrix
"""

from typing import Dict, List, Optional, Any, Tuple, Iterator
from dataclasses import dataclass, field
import math

from .exceptions import UnknownUserError

# Distance sentinel for "no known finite path"
INFINITY = math.inf


@dataclass
class UserProfile:
    """Represents a user profile in the social network"""

    id: str
    name: str = ""
    age: int = 0
    location: str = ""
    interests: List[str] = field(default_factory=list)
    profile_data: Dict[str, str] = field(default_factory=dict)

    def add_interest(self, interest: str):
        """Add an interest, ignoring duplicates"""
        if interest not in self.interests:
            self.interests.append(interest)

    def remove_interest(self, interest: str):
        """Remove an interest if present"""
        if interest in self.interests:
            self.interests.remove(interest)

    def add_profile_data(self, key: str, value: str):
        self.profile_data[key] = value

    def get_profile_data(self, key: str) -> str:
        return self.profile_data.get(key, "")

    def has_profile_data(self, key: str) -> bool:
        return key in self.profile_data

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary for serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "location": self.location,
            "interests": list(self.interests),
            "profile_data": dict(self.profile_data)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserProfile':
        """Create profile from dictionary

        Raises TypeError or ValueError when a field has the wrong shape; the
        parser turns those into MalformedInputError.
        """
        if "id" not in data:
            raise ValueError("user record has no 'id'")
        user_id = data["id"]
        if not isinstance(user_id, str) or not user_id:
            raise ValueError(f"user id must be a non-empty string, got {user_id!r}")

        name = data.get("name", "") or ""
        location = data.get("location", "") or ""
        if not isinstance(name, str) or not isinstance(location, str):
            raise TypeError(f"name and location of user {user_id!r} must be strings")

        age = data.get("age", 0)
        if isinstance(age, bool) or not isinstance(age, (int, str)):
            raise TypeError(f"age of user {user_id!r} must be an integer")
        age = int(age) if age != "" else 0

        interests = data.get("interests", []) or []
        if not isinstance(interests, list) or not all(isinstance(i, str) for i in interests):
            raise TypeError(f"interests of user {user_id!r} must be a list of strings")

        profile_data = data.get("profile_data", {}) or {}
        if not isinstance(profile_data, dict) or not all(isinstance(v, str) for v in profile_data.values()):
            raise TypeError(f"profile_data of user {user_id!r} must be an object of strings")

        profile = cls(id=user_id, name=name, age=age, location=location)
        for interest in interests:
            profile.add_interest(interest)
        for key, value in profile_data.items():
            profile.add_profile_data(str(key), str(value))
        return profile

    def __str__(self) -> str:
        parts = [f"ID: {self.id}", f"Name: {self.name}", f"Age: {self.age}", f"Location: {self.location}"]
        if self.interests:
            parts.append("Interests: " + ", ".join(self.interests))
        for key, value in self.profile_data.items():
            parts.append(f"{key}: {value}")
        return "\n".join(parts)


@dataclass(frozen=True)
class Edge:
    """Undirected connection with user1 < user2"""

    user1: str
    user2: str
    weight: int = 1


class UserRegistry:
    """Bidirectional mapping between user identifiers and dense indices.

    Indices are handed out in first-seen order and never reassigned, so the
    index range is always exactly [0, len(registry)).
    """

    def __init__(self):
        self._indices: Dict[str, int] = {}
        self._users: List[str] = []

    def register(self, user_id: str) -> Tuple[int, bool]:
        """Return (index, created) for user_id, assigning the next index if unseen"""
        index = self._indices.get(user_id)
        if index is not None:
            return index, False
        index = len(self._users)
        self._indices[user_id] = index
        self._users.append(user_id)
        return index, True

    def index_of(self, user_id: str) -> int:
        try:
            return self._indices[user_id]
        except KeyError:
            raise UnknownUserError(user_id) from None

    def user_at(self, index: int) -> str:
        return self._users[index]

    def users(self) -> List[str]:
        return list(self._users)

    def clear(self):
        self._indices.clear()
        self._users.clear()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._indices

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._users))


class SocialGraph:
    """Manages the social network graph structure.

    Connectivity is stored twice: an adjacency list (identifier -> neighbors
    in insertion order) for traversal, and an adjacency matrix over registry
    indices for path algorithms. Both are private and only change through the
    mutators below, which always update them together.
    """

    def __init__(self):
        self._registry = UserRegistry()
        self._adjacency_list: Dict[str, List[str]] = {}
        self._adjacency_matrix: List[List[float]] = []

    def add_user(self, user_id: str):
        """Add a user to the graph; a known user is left untouched"""
        _, created = self._registry.register(user_id)
        if not created:
            return

        self._adjacency_list[user_id] = []

        # Grow the matrix in place: one new column per row, then the new row
        for row in self._adjacency_matrix:
            row.append(INFINITY)
        size = len(self._registry)
        new_row = [INFINITY] * size
        new_row[size - 1] = 0
        self._adjacency_matrix.append(new_row)

    def add_connection(self, user1: str, user2: str):
        """Connect two users, creating either of them if needed"""
        if user1 == user2:
            return

        self.add_user(user1)
        self.add_user(user2)

        if user2 in self._adjacency_list[user1]:
            return

        self._adjacency_list[user1].append(user2)
        self._adjacency_list[user2].append(user1)

        idx1 = self._registry.index_of(user1)
        idx2 = self._registry.index_of(user2)
        self._adjacency_matrix[idx1][idx2] = 1
        self._adjacency_matrix[idx2][idx1] = 1

    def remove_connection(self, user1: str, user2: str):
        """Disconnect two users; unknown users or missing edges are ignored"""
        if user1 not in self._registry or user2 not in self._registry:
            return

        neighbors1 = self._adjacency_list[user1]
        neighbors2 = self._adjacency_list[user2]
        if user2 in neighbors1:
            neighbors1.remove(user2)
        if user1 in neighbors2:
            neighbors2.remove(user1)

        idx1 = self._registry.index_of(user1)
        idx2 = self._registry.index_of(user2)
        if idx1 != idx2:
            self._adjacency_matrix[idx1][idx2] = INFINITY
            self._adjacency_matrix[idx2][idx1] = INFINITY

    def are_connected(self, user1: str, user2: str) -> bool:
        if user1 not in self._registry or user2 not in self._registry:
            return False
        return user2 in self._adjacency_list[user1]

    def clear(self):
        """Drop every user and connection"""
        self._registry.clear()
        self._adjacency_list.clear()
        self._adjacency_matrix.clear()

    # Read-only accessors. Everything returned is a copy.

    def has_user(self, user_id: str) -> bool:
        return user_id in self._registry

    def neighbors(self, user_id: str) -> Tuple[str, ...]:
        """Neighbors of user_id in insertion order"""
        try:
            return tuple(self._adjacency_list[user_id])
        except KeyError:
            raise UnknownUserError(user_id) from None

    def index_of(self, user_id: str) -> int:
        return self._registry.index_of(user_id)

    def get_adjacency_list(self) -> Dict[str, List[str]]:
        return {user_id: list(neighbors) for user_id, neighbors in self._adjacency_list.items()}

    def get_adjacency_matrix(self) -> List[List[float]]:
        return [list(row) for row in self._adjacency_matrix]

    def get_users(self) -> List[str]:
        return self._registry.users()

    def get_user_count(self) -> int:
        return len(self._registry)

    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency_list.values()) // 2

    def get_network_stats(self) -> Dict[str, Any]:
        """Get basic network statistics"""
        n = self.get_user_count()
        edges = self.edge_count()
        possible_edges = n * (n - 1) / 2
        most_connected: Optional[str] = None
        if self._adjacency_list:
            most_connected = max(self._registry, key=lambda uid: len(self._adjacency_list[uid]))

        return {
            "total_users": n,
            "total_connections": edges,
            "average_connections": (2 * edges / n) if n else 0.0,
            "most_connected_user": most_connected,
            "network_density": edges / possible_edges if possible_edges > 0 else 0.0
        }

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._registry

    def __len__(self) -> int:
        return len(self._registry)
