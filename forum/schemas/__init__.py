from .user import (
	UserCreate,
	UserLogin,
	UserProfileUpdate,
	AccountDeleteRequest,
	UserResponse,
	PublicUserResponse,
	UserStats,
	UserWithStatsResponse,
	LoginResponse,
	ProfileResponse,
)
from .category import (
	CategoryResponse,
	CategoryListResponse,
)
from .comment import (
	CommentCreate,
	CommentResponse,
	CommentNodeResponse,
)
from .post import (
	SortKey,
	SortOrder,
	PostFilter,
	PostCreate,
	PostResponse,
	PostListResponse,
	PostDetailResponse,
	SearchResponse,
	SearchSuggestion,
)
from .vote import (
	VoteAction,
	VoteRequest,
	VoteStatus,
	VoteResponse,
)

__all__ = [
	# User
	"UserCreate",
	"UserLogin",
	"UserProfileUpdate",
	"AccountDeleteRequest",
	"UserResponse",
	"PublicUserResponse",
	"UserStats",
	"UserWithStatsResponse",
	"LoginResponse",
	"ProfileResponse",
	# Category
	"CategoryResponse",
	"CategoryListResponse",
	# Comment
	"CommentCreate",
	"CommentResponse",
	"CommentNodeResponse",
	# Post
	"SortKey",
	"SortOrder",
	"PostFilter",
	"PostCreate",
	"PostResponse",
	"PostListResponse",
	"PostDetailResponse",
	"SearchResponse",
	"SearchSuggestion",
	# Vote
	"VoteAction",
	"VoteRequest",
	"VoteStatus",
	"VoteResponse",
]
