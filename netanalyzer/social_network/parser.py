"""
Network Parser Module

Reads and writes a social network as JSON or CSV. Loading is all-or-nothing:
the whole input is parsed and validated into staging lists first, and only
then applied to the target graph and profile list. A failure at any point
raises MalformedInputError and leaves both untouched.

JSON layout:
    {"users": [{"id", "name", "age", "location", "interests", "profile_data"}],
     "connections": [{"user1", "user2"}]}

CSV layout:
    users file:       id,name,age,location[,interests][,<profile key>...]
    connections file: user1,user2
"""

from typing import List, Dict, Any, Optional, Tuple
import csv
import json
import logging

from .models import SocialGraph, UserProfile
from .exceptions import MalformedInputError

logger = logging.getLogger("netanalyzer.social_network.parser")

USER_COLUMNS = ["id", "name", "age", "location"]
INTERESTS_COLUMN = "interests"
INTEREST_SEPARATOR = ";"
CONNECTION_COLUMNS = ["user1", "user2"]

Connection = Tuple[str, str]


class NetworkParser:
    """Load and save a SocialGraph together with its UserProfile records"""

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def parse_json_file(filename: str, graph: SocialGraph, users: List[UserProfile]):
        """Load a JSON network file into graph and users"""
        text = NetworkParser._read_file(filename)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON: {e}", source=filename) from e

        profiles, connections = NetworkParser.parse_json_data(data, source=filename)
        NetworkParser._apply(graph, users, profiles, connections, source=filename)

    @staticmethod
    def parse_json_data(data: Any, source: str = "<data>") -> Tuple[List[UserProfile], List[Connection]]:
        """Validate an already-decoded JSON document into staging lists"""
        if not isinstance(data, dict):
            raise MalformedInputError("Expected an object at the top level", source=source)

        raw_users = data.get("users", [])
        raw_connections = data.get("connections", [])
        if not isinstance(raw_users, list):
            raise MalformedInputError("'users' must be an array", source=source)
        if not isinstance(raw_connections, list):
            raise MalformedInputError("'connections' must be an array", source=source)

        profiles = []
        for position, raw_user in enumerate(raw_users):
            if not isinstance(raw_user, dict):
                raise MalformedInputError(f"User entry {position} is not an object", source=source)
            try:
                profiles.append(UserProfile.from_dict(raw_user))
            except (TypeError, ValueError) as e:
                raise MalformedInputError(f"User entry {position}: {e}", source=source) from e

        connections = []
        for position, raw_connection in enumerate(raw_connections):
            if not isinstance(raw_connection, dict):
                raise MalformedInputError(f"Connection entry {position} is not an object", source=source)
            user1 = raw_connection.get("user1")
            user2 = raw_connection.get("user2")
            if user1 is None or user2 is None or user1 == "" or user2 == "":
                logger.debug("Skipping incomplete connection entry %d in %s", position, source)
                continue
            if not isinstance(user1, str) or not isinstance(user2, str):
                raise MalformedInputError(f"Connection entry {position} endpoints must be strings", source=source)
            connections.append((user1, user2))

        return profiles, connections

    @staticmethod
    def parse_csv_file(filename: str, graph: SocialGraph, users: List[UserProfile],
                       connections_path: Optional[str] = None):
        """Load a CSV users file, and optionally a CSV connections file"""
        rows = NetworkParser._read_csv(filename)
        profiles = NetworkParser.parse_user_rows(rows, source=filename)

        connections: List[Connection] = []
        if connections_path:
            connection_rows = NetworkParser._read_csv(connections_path)
            connections = NetworkParser.parse_connection_rows(connection_rows, source=connections_path)

        NetworkParser._apply(graph, users, profiles, connections, source=filename)

    @staticmethod
    def parse_user_rows(rows: List[List[str]], source: str = "<csv>") -> List[UserProfile]:
        if not rows:
            raise MalformedInputError("Missing header row", source=source)

        headers = [header.strip() for header in rows[0]]
        if headers[:len(USER_COLUMNS)] != USER_COLUMNS:
            raise MalformedInputError(
                f"Header must start with {','.join(USER_COLUMNS)}", source=source
            )

        profiles = []
        for line_number, values in enumerate(rows[1:], start=2):
            if not any(value.strip() for value in values):
                continue
            if len(values) < len(USER_COLUMNS):
                raise MalformedInputError(f"Line {line_number}: expected at least {len(USER_COLUMNS)} fields",
                                          source=source)
            user_id, name, age, location = values[:4]
            try:
                profile = UserProfile(id=user_id, name=name, age=int(age) if age.strip() else 0, location=location)
            except ValueError as e:
                raise MalformedInputError(f"Line {line_number}: invalid age {age!r}", source=source) from e
            if not user_id:
                raise MalformedInputError(f"Line {line_number}: empty user id", source=source)

            for header, value in zip(headers[4:], values[4:]):
                if header == INTERESTS_COLUMN:
                    for interest in value.split(INTEREST_SEPARATOR):
                        if interest:
                            profile.add_interest(interest)
                elif value:
                    profile.add_profile_data(header, value)
            profiles.append(profile)

        return profiles

    @staticmethod
    def parse_connection_rows(rows: List[List[str]], source: str = "<csv>") -> List[Connection]:
        if not rows:
            return []
        headers = [header.strip() for header in rows[0]]
        if headers[:2] != CONNECTION_COLUMNS:
            raise MalformedInputError(f"Header must be {','.join(CONNECTION_COLUMNS)}", source=source)

        connections = []
        for line_number, values in enumerate(rows[1:], start=2):
            if not any(value.strip() for value in values):
                continue
            if len(values) < 2 or not values[0] or not values[1]:
                raise MalformedInputError(f"Line {line_number}: expected two user ids", source=source)
            connections.append((values[0], values[1]))
        return connections

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    @staticmethod
    def to_json_data(graph: SocialGraph, users: List[UserProfile]) -> Dict[str, Any]:
        return {
            "users": [user.to_dict() for user in users]
                     + [{"id": user_id} for user_id in NetworkParser._unprofiled_users(graph, users)],
            "connections": [
                {"user1": user1, "user2": user2}
                for user1, user2 in NetworkParser._unique_connections(graph)
            ]
        }

    @staticmethod
    def export_to_json(filename: str, graph: SocialGraph, users: List[UserProfile]):
        data = NetworkParser.to_json_data(graph, users)
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        logger.info("Saved %d users and %d connections to %s",
                    len(data["users"]), len(data["connections"]), filename)

    @staticmethod
    def export_to_csv(filename: str, graph: SocialGraph, users: List[UserProfile],
                      connections_path: Optional[str] = None):
        reserved = USER_COLUMNS + [INTERESTS_COLUMN]
        extra_keys: List[str] = []
        for user in users:
            for key in user.profile_data:
                if key in reserved:
                    logger.warning("Dropping profile key %r of user %s: it clashes with a CSV column",
                                   key, user.id)
                elif key not in extra_keys:
                    extra_keys.append(key)

        unprofiled = NetworkParser._unprofiled_users(graph, users)
        with open(filename, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(reserved + extra_keys)
            for user in users:
                writer.writerow(
                    [user.id, user.name, user.age, user.location, INTEREST_SEPARATOR.join(user.interests)]
                    + [user.get_profile_data(key) for key in extra_keys]
                )
            for user_id in unprofiled:
                writer.writerow([user_id] + [""] * (len(reserved) - 1 + len(extra_keys)))

        connection_count = 0
        if connections_path:
            with open(connections_path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(CONNECTION_COLUMNS)
                for user1, user2 in NetworkParser._unique_connections(graph):
                    writer.writerow([user1, user2])
                    connection_count += 1

        logger.info("Saved %d users and %d connections to %s",
                    len(users) + len(unprofiled), connection_count, filename)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _unprofiled_users(graph: SocialGraph, users: List[UserProfile]) -> List[str]:
        """Graph nodes without a profile record, in registry order"""
        profiled = {user.id for user in users}
        return [user_id for user_id in graph.get_users() if user_id not in profiled]

    @staticmethod
    def _read_file(filename: str) -> str:
        try:
            with open(filename, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedInputError(f"Could not read file: {e}", source=filename) from e

    @staticmethod
    def _read_csv(filename: str) -> List[List[str]]:
        try:
            with open(filename, "r", encoding="utf-8", newline="") as f:
                return list(csv.reader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise MalformedInputError(f"Could not read CSV: {e}", source=filename) from e

    @staticmethod
    def _unique_connections(graph: SocialGraph) -> List[Connection]:
        connections = []
        for user_id, neighbors in graph.get_adjacency_list().items():
            for neighbor in neighbors:
                if user_id < neighbor:
                    connections.append((user_id, neighbor))
        return connections

    @staticmethod
    def _apply(graph: SocialGraph, users: List[UserProfile], profiles: List[UserProfile],
               connections: List[Connection], source: str):
        """Commit staged records; validation happens before anything is mutated"""
        known_ids = {user.id for user in users}
        for profile in profiles:
            if profile.id in known_ids:
                raise MalformedInputError(f"Duplicate user id: {profile.id}", source=source)
            known_ids.add(profile.id)

        for profile in profiles:
            users.append(profile)
            graph.add_user(profile.id)
        for user1, user2 in connections:
            graph.add_connection(user1, user2)

        logger.info("Loaded %d users and %d connections from %s", len(profiles), len(connections), source)
