"""
Pydantic models for request/response validation
"""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator, ConfigDict


def _non_empty(value: str, name: str) -> str:
    if not value or value.strip() == "":
        raise ValueError(f"{name} must be a non-empty string")
    return value


class UserBase(BaseModel):
    """Base user model"""
    name: str = ""
    age: int = Field(default=0, ge=0, le=150)
    location: str = ""
    interests: List[str] = Field(default_factory=list)
    profile_data: Dict[str, str] = Field(default_factory=dict)


class UserCreate(UserBase):
    """User creation model"""
    id: str

    @field_validator('id')
    def id_non_empty(cls, v: str) -> str:
        return _non_empty(v, "id")


class UserResponse(UserBase):
    """User response model"""
    id: str
    connections: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ConnectionRequest(BaseModel):
    """Connection between two users"""
    user1: str
    user2: str

    @field_validator('user1', 'user2')
    def user_non_empty(cls, v: str) -> str:
        return _non_empty(v, "user id")


class NetworkFileRequest(BaseModel):
    """Load or save request for a network file"""
    path: Optional[str] = Field(default=None, description="Network file path; defaults to the configured data path")
    format: str = Field(default="json", pattern="^(json|csv)$")
    connections_path: Optional[str] = Field(default=None, description="Connections CSV when format is csv")
    replace: bool = Field(default=True, description="Discard the current network before loading")


class TraversalResponse(BaseModel):
    """Traversal or recommendation result"""
    start: str
    users: List[str]
    count: int


class CommunityResponse(BaseModel):
    """Community detection result"""
    threshold: int
    communities: List[List[str]]
    community_count: int
    largest_community: List[str]


class ShortestPathsResponse(BaseModel):
    """All-pairs shortest path lengths; null marks unreachable pairs"""
    users: List[str]
    distances: List[List[Optional[int]]]


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Error response"""
    error: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
