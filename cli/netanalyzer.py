#!/usr/bin/env python3
from __future__ import annotations
import argparse, json, logging, os, sys

from netanalyzer.common import config
from netanalyzer.social_network import (
    SocialGraph, UserProfile, GraphAlgorithms, StringSearch, NetworkParser,
    SocialNetworkError, INFINITY,
)

logger = logging.getLogger("cli.netanalyzer")


def detect_format(path: str, requested: str | None) -> str:
    if requested:
        return requested
    return "csv" if path.lower().endswith(".csv") else "json"


def load_network(path: str, fmt: str, connections_path: str | None):
    graph, users = SocialGraph(), []
    if fmt == "csv":
        NetworkParser.parse_csv_file(path, graph, users, connections_path=connections_path)
    else:
        NetworkParser.parse_json_file(path, graph, users)
    return graph, users


def save_network(path: str, fmt: str, connections_path: str | None, graph, users):
    if fmt == "csv":
        NetworkParser.export_to_csv(path, graph, users, connections_path=connections_path)
    else:
        NetworkParser.export_to_json(path, graph, users)


def names_by_id(users):
    return {user.id: user.name for user in users}


def emit(args, payload, text_lines):
    if args.json:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
    else:
        for line in text_lines:
            sys.stdout.write(line + "\n")


def cmd_users(args, graph, users):
    emit(args, [u.to_dict() for u in users], [str(u) + "\n" for u in users])


def cmd_add_user(args, graph, users):
    if any(u.id == args.id for u in users):
        raise SystemExit(f"User already exists: {args.id}")
    user = UserProfile(id=args.id, name=args.name or "", age=args.age, location=args.location or "")
    for interest in args.interest or []:
        user.add_interest(interest)
    users.append(user)
    graph.add_user(user.id)
    emit(args, user.to_dict(), [f"Added user {user.id}"])
    return True


def cmd_connect(args, graph, users):
    if args.user1 == args.user2:
        raise SystemExit("A user cannot be connected to themselves")
    for uid in (args.user1, args.user2):
        if not graph.has_user(uid):
            raise SystemExit(f"User not found: {uid}")
    graph.add_connection(args.user1, args.user2)
    emit(args, {"user1": args.user1, "user2": args.user2, "connected": True},
         [f"Connected {args.user1} and {args.user2}"])
    return True


def cmd_disconnect(args, graph, users):
    graph.remove_connection(args.user1, args.user2)
    emit(args, {"user1": args.user1, "user2": args.user2, "connected": False},
         [f"Disconnected {args.user1} and {args.user2}"])
    return True


def cmd_traverse(args, graph, users):
    algorithms = GraphAlgorithms(graph)
    order = algorithms.bfs(args.user) if args.command == "bfs" else algorithms.dfs(args.user)
    emit(args, {"start": args.user, "order": order}, [" -> ".join(order)])


def cmd_recommend(args, graph, users):
    algorithms = GraphAlgorithms(graph)
    names = names_by_id(users)
    targets = [args.user] if args.user else graph.get_users()
    lines = []
    result = {}
    for uid in targets:
        recs = algorithms.friend_recommendations(uid, args.depth)
        result[uid] = recs
        lines.append(f"Recommendations for {names.get(uid) or uid}:")
        lines.extend(f"- {names.get(r) or r}" for r in recs)
    emit(args, result, lines)


def cmd_communities(args, graph, users):
    communities = GraphAlgorithms(graph).detect_communities(args.threshold)
    lines = ["Detected Communities:"]
    lines.extend(f"Community {i}: {', '.join(c)}" for i, c in enumerate(communities, start=1))
    emit(args, {"threshold": args.threshold, "communities": communities}, lines)


def cmd_paths(args, graph, users):
    ids = graph.get_users()
    dist = GraphAlgorithms(graph).floyd_warshall()
    rows = [[None if d == INFINITY else int(d) for d in row] for row in dist]
    lines = ["All-Pairs Shortest Paths (Degrees of Separation):", f"{'':>15}" + "".join(f"{u:>8}" for u in ids)]
    for uid, row in zip(ids, rows):
        lines.append(f"{uid:>15}" + "".join(f"{'inf' if d is None else d:>8}" for d in row))
    emit(args, {"users": ids, "distances": rows}, lines)


def cmd_search(args, graph, users):
    opts = dict(algorithm=args.algorithm, ignore_case=args.ignore_case)
    if args.field == "name":
        found = StringSearch.search_users_by_name(users, args.pattern, **opts)
    elif args.field == "location":
        found = StringSearch.search_users_by_location(users, args.pattern, **opts)
    elif args.field == "interest":
        found = StringSearch.search_users_by_interest(users, args.pattern, **opts)
    else:
        if not args.key:
            raise SystemExit("--key is required for profile search")
        found = StringSearch.search_users_by_profile_data(users, args.key, args.pattern, **opts)
    lines = [str(u) + "\n" for u in found] or ["No matching users found."]
    emit(args, [u.to_dict() for u in found], lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="netanalyzer", description="Analyze a social network file")
    p.add_argument("--data", default=config.DATA_PATH, help="Network file (JSON, or CSV users file)")
    p.add_argument("--format", choices=["json", "csv"], help="File format (default: from extension)")
    p.add_argument("--connections", help="Connections CSV used with --format csv")
    p.add_argument("--save", action="store_true", help="Write the network back after a mutating command")
    p.add_argument("--json", action="store_true", help="Print results as JSON")
    p.add_argument("--log-level", default=config.LOG_LEVEL)
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("users", help="List all users").set_defaults(func=cmd_users)

    s = sub.add_parser("add-user", help="Add a new user")
    s.add_argument("id")
    s.add_argument("--name")
    s.add_argument("--age", type=int, default=0)
    s.add_argument("--location")
    s.add_argument("--interest", action="append", help="May be given several times")
    s.set_defaults(func=cmd_add_user)

    for name, fn, text in (("connect", cmd_connect, "Connect two users"),
                           ("disconnect", cmd_disconnect, "Remove a connection")):
        s = sub.add_parser(name, help=text)
        s.add_argument("user1")
        s.add_argument("user2")
        s.set_defaults(func=fn)

    for name in ("bfs", "dfs"):
        s = sub.add_parser(name, help=f"{name.upper()} traversal from a user")
        s.add_argument("user")
        s.set_defaults(func=cmd_traverse)

    s = sub.add_parser("recommend", help="Friend recommendations (all users if none given)")
    s.add_argument("user", nargs="?")
    s.add_argument("--depth", type=int, default=config.RECOMMENDATION_DEPTH)
    s.set_defaults(func=cmd_recommend)

    s = sub.add_parser("communities", help="Detect communities")
    s.add_argument("--threshold", type=int, default=config.COMMUNITY_THRESHOLD)
    s.set_defaults(func=cmd_communities)

    sub.add_parser("paths", help="All-pairs shortest paths").set_defaults(func=cmd_paths)

    s = sub.add_parser("search", help="Search user profiles")
    s.add_argument("field", choices=["name", "location", "interest", "profile"])
    s.add_argument("pattern")
    s.add_argument("--key", help="Profile data key for field 'profile'")
    s.add_argument("--algorithm", choices=["kmp", "rabin_karp"], default=config.SEARCH_ALGORITHM)
    s.add_argument("--ignore-case", action="store_true")
    s.set_defaults(func=cmd_search)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    fmt = detect_format(args.data, args.format)

    try:
        if os.path.exists(args.data):
            graph, users = load_network(args.data, fmt, args.connections)
        else:
            logger.warning("Network file %s not found, starting with an empty network", args.data)
            graph, users = SocialGraph(), []
        changed = args.func(args, graph, users)
        if changed and args.save:
            save_network(args.data, fmt, args.connections, graph, users)
    except (SocialNetworkError, OSError) as e:
        logger.error("%s", e)
        sys.stderr.write(f"error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
