"""
netanalyzer API - Main FastAPI application
"""
import os
import logging
from typing import List, Dict, Any, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, JSONResponse
from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST

# Local imports
from . import config
from .exceptions import NetAnalyzerException, ValidationError, NotFoundError, FileProcessingError
from .models import (
    UserCreate, UserResponse, ConnectionRequest, NetworkFileRequest,
    TraversalResponse, CommunityResponse, ShortestPathsResponse,
    HealthResponse, ErrorResponse,
)

from netanalyzer.social_network import (
    SocialGraph, UserProfile, GraphAlgorithms, StringSearch, NetworkParser,
    SocialNetworkError, INFINITY,
)

logger = logging.getLogger("apps.api.main")

# In-memory network served by this process
_social_graph = SocialGraph()
_users: List[UserProfile] = []


def _load_network(request: NetworkFileRequest, graph: SocialGraph, users: List[UserProfile]) -> str:
    path = request.path or config.DEFAULT_DATA_PATH
    if request.format == "csv":
        NetworkParser.parse_csv_file(path, graph, users, connections_path=request.connections_path)
    else:
        NetworkParser.parse_json_file(path, graph, users)
    return path


@asynccontextmanager
async def lifespan(app: FastAPI):
    path = config.DEFAULT_DATA_PATH
    if os.getenv("NETANALYZER_AUTOLOAD", "1") == "1" and os.path.exists(path):
        try:
            _load_network(NetworkFileRequest(path=path, format=config.DEFAULT_DATA_FORMAT),
                          _social_graph, _users)
            logger.info("Loaded network from %s at startup", path)
        except SocialNetworkError as e:
            logger.warning("Startup load of %s failed: %s", path, e)
    yield


# Initialize FastAPI app
app = FastAPI(
    title=config.APP_TITLE,
    version=config.APP_VERSION,
    description="Social network analytics: traversal, shortest paths, communities and profile search",
    lifespan=lifespan
)

# Prometheus metrics
REQS = Counter("api_requests_total", "Total API requests", ["endpoint"])
HEALTH = Gauge("app_health", "Health status")
NETWORK_USERS = Gauge("social_network_users", "Users in the served network")


def _error_payload(exc) -> Dict[str, Any]:
    return ErrorResponse(
        error=exc.__class__.__name__,
        message=exc.message,
        details=exc.details,
    ).model_dump()


@app.exception_handler(NetAnalyzerException)
def _netanalyzer_exception_handler(request, exc: NetAnalyzerException):
    """Convert API exceptions into JSON HTTP responses."""
    return JSONResponse(status_code=exc.status_code, content=_error_payload(exc))


@app.exception_handler(SocialNetworkError)
def _social_network_exception_handler(request, exc: SocialNetworkError):
    """Convert core exceptions (unknown user, malformed input, bad algorithm) into JSON HTTP responses."""
    return JSONResponse(status_code=exc.status_code, content=_error_payload(exc))


def _find_profile(user_id: str) -> Optional[UserProfile]:
    for user in _users:
        if user.id == user_id:
            return user
    return None


def _user_response(user_id: str) -> UserResponse:
    connections = list(_social_graph.neighbors(user_id))
    profile = _find_profile(user_id)
    if profile is None:
        return UserResponse(id=user_id, connections=connections)
    return UserResponse(connections=connections, **profile.to_dict())


@app.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
    """Health check endpoint"""
    HEALTH.set(1)
    return HealthResponse()


@app.get("/metrics")
def metrics() -> PlainTextResponse:
    """Prometheus metrics endpoint"""
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ============================================================================
# SOCIAL NETWORK ENDPOINTS
# ============================================================================

@app.post("/social-network/load")
def load_social_network(request: NetworkFileRequest):
    """Load a network file into the served network"""
    REQS.labels("/social-network/load").inc()
    global _social_graph, _users

    if request.replace:
        graph, users = SocialGraph(), []
        path = _load_network(request, graph, users)
        _social_graph, _users = graph, users
    else:
        path = _load_network(request, _social_graph, _users)

    NETWORK_USERS.set(_social_graph.get_user_count())
    logger.info("Network loaded from %s (%d users)", path, _social_graph.get_user_count())
    return {
        "message": "Social network loaded successfully",
        "path": path,
        "users": _social_graph.get_user_count(),
        "connections": _social_graph.edge_count()
    }


@app.post("/social-network/save")
def save_social_network(request: NetworkFileRequest):
    """Write the served network to a file"""
    REQS.labels("/social-network/save").inc()
    path = request.path or config.DEFAULT_DATA_PATH
    try:
        if request.format == "csv":
            NetworkParser.export_to_csv(path, _social_graph, _users, connections_path=request.connections_path)
        else:
            NetworkParser.export_to_json(path, _social_graph, _users)
    except OSError as e:
        logger.error("Saving network to %s failed: %s", path, e)
        raise FileProcessingError(path, str(e))

    return {"message": "Social network saved successfully", "path": path}


@app.get("/social-network/stats")
def get_social_network_stats():
    """Get social network statistics"""
    REQS.labels("/social-network/stats").inc()
    stats = _social_graph.get_network_stats()
    stats["total_profiles"] = len(_users)
    return stats


@app.get("/social-network/users")
def list_users(limit: int = config.DEFAULT_PAGE_SIZE, offset: int = 0):
    """Get users in the social network"""
    REQS.labels("/social-network/users").inc()
    user_ids = _social_graph.get_users()[offset:offset + limit]
    return {
        "users": [_user_response(user_id).model_dump() for user_id in user_ids],
        "total": _social_graph.get_user_count(),
        "limit": limit,
        "offset": offset
    }


@app.post("/social-network/users", response_model=UserResponse)
def create_user(request: UserCreate) -> UserResponse:
    """Add a user profile and graph node"""
    REQS.labels("/social-network/users/create").inc()
    if _find_profile(request.id) is not None:
        raise ValidationError(f"User already exists: {request.id}", field="id")

    profile = UserProfile.from_dict(request.model_dump())
    _users.append(profile)
    _social_graph.add_user(profile.id)
    NETWORK_USERS.set(_social_graph.get_user_count())
    return _user_response(profile.id)


@app.get("/social-network/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str) -> UserResponse:
    """Get a user profile with its direct connections"""
    REQS.labels("/social-network/users/detail").inc()
    if not _social_graph.has_user(user_id):
        raise NotFoundError("User", user_id)
    return _user_response(user_id)


@app.post("/social-network/connections")
def add_connection(request: ConnectionRequest):
    """Connect two existing users"""
    REQS.labels("/social-network/connections/add").inc()
    if request.user1 == request.user2:
        raise ValidationError("A user cannot be connected to themselves", field="user2")
    for user_id in (request.user1, request.user2):
        if not _social_graph.has_user(user_id):
            raise NotFoundError("User", user_id)

    _social_graph.add_connection(request.user1, request.user2)
    return {"user1": request.user1, "user2": request.user2, "connected": True}


@app.delete("/social-network/connections/{user1}/{user2}")
def remove_connection(user1: str, user2: str):
    """Disconnect two users; missing connections are ignored"""
    REQS.labels("/social-network/connections/remove").inc()
    _social_graph.remove_connection(user1, user2)
    return {"user1": user1, "user2": user2, "connected": _social_graph.are_connected(user1, user2)}


@app.get("/social-network/bfs/{user_id}", response_model=TraversalResponse)
def breadth_first(user_id: str) -> TraversalResponse:
    """Breadth-first traversal from a user"""
    REQS.labels("/social-network/bfs").inc()
    order = GraphAlgorithms(_social_graph).bfs(user_id)
    return TraversalResponse(start=user_id, users=order, count=len(order))


@app.get("/social-network/dfs/{user_id}", response_model=TraversalResponse)
def depth_first(user_id: str) -> TraversalResponse:
    """Depth-first traversal from a user"""
    REQS.labels("/social-network/dfs").inc()
    order = GraphAlgorithms(_social_graph).dfs(user_id)
    return TraversalResponse(start=user_id, users=order, count=len(order))


@app.get("/social-network/recommendations/{user_id}", response_model=TraversalResponse)
def friend_recommendations(user_id: str, depth: int = config.DEFAULT_RECOMMENDATION_DEPTH) -> TraversalResponse:
    """Friends-of-friends recommendations up to depth hops"""
    REQS.labels("/social-network/recommendations").inc()
    recommendations = GraphAlgorithms(_social_graph).friend_recommendations(user_id, depth)
    return TraversalResponse(start=user_id, users=recommendations, count=len(recommendations))


@app.get("/social-network/shortest-paths", response_model=ShortestPathsResponse)
def shortest_paths() -> ShortestPathsResponse:
    """All-pairs degrees of separation"""
    REQS.labels("/social-network/shortest-paths").inc()
    dist = GraphAlgorithms(_social_graph).floyd_warshall()
    return ShortestPathsResponse(
        users=_social_graph.get_users(),
        distances=[[None if d == INFINITY else int(d) for d in row] for row in dist]
    )


@app.get("/social-network/communities", response_model=CommunityResponse)
def detect_communities(threshold: int = config.DEFAULT_COMMUNITY_THRESHOLD) -> CommunityResponse:
    """Detect communities in the social network"""
    REQS.labels("/social-network/communities").inc()
    communities = GraphAlgorithms(_social_graph).detect_communities(threshold)
    return CommunityResponse(
        threshold=threshold,
        communities=communities,
        community_count=len(communities),
        largest_community=max(communities, key=len) if communities else []
    )


@app.get("/social-network/search")
def search_users(q: str, field: str = "name", algorithm: str = config.DEFAULT_SEARCH_ALGORITHM,
                 key: Optional[str] = None, ignore_case: bool = False):
    """Search user profiles by name, location, interest or a profile data key"""
    REQS.labels("/social-network/search").inc()

    if field == "name":
        results = StringSearch.search_users_by_name(_users, q, algorithm, ignore_case)
    elif field == "location":
        results = StringSearch.search_users_by_location(_users, q, algorithm, ignore_case)
    elif field == "interest":
        results = StringSearch.search_users_by_interest(_users, q, algorithm, ignore_case)
    elif field == "profile":
        if not key:
            raise ValidationError("Profile search requires a key", field="key")
        results = StringSearch.search_users_by_profile_data(_users, key, q, algorithm, ignore_case)
    else:
        raise ValidationError(f"Unknown search field: {field}", field="field")

    return {
        "query": q,
        "field": field,
        "algorithm": algorithm,
        "results": [user.to_dict() for user in results],
        "count": len(results)
    }
