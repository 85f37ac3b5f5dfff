"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from forum.schemas.post import PostResponse


USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_email(v: str) -> str:
	if len(v) < 5 or len(v) > 254:
		raise ValueError("Invalid email format")
	if v.count("@") != 1:
		raise ValueError("Invalid email format")
	local, domain = v.split("@")
	if not local or not domain or "." not in domain:
		raise ValueError("Invalid email format")
	return v


class UserCreate(BaseModel):
	username: str
	email: str
	password: str

	@field_validator("username")
	@classmethod
	def validate_username(cls, v: str) -> str:
		v = v.strip()
		if len(v) < 3:
			raise ValueError("username must be at least 3 characters long")
		if len(v) > 50:
			raise ValueError("username is too long")
		if not USERNAME_PATTERN.match(v):
			raise ValueError("username can only contain letters, numbers, underscores, and hyphens")
		return v

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v.strip())

	@field_validator("password")
	@classmethod
	def validate_password(cls, v: str) -> str:
		if len(v) < 6:
			raise ValueError("password must be at least 6 characters long")
		if len(v) > 128:
			raise ValueError("password is too long")
		return v

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"username": "bookworm",
			"email": "reader@example.com",
			"password": "StrongPass!234",
		}
	})


class UserLogin(BaseModel):
	email: str
	password: str

	@field_validator("email")
	@classmethod
	def strip_email(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise ValueError("Email is required")
		return v

	@field_validator("password")
	@classmethod
	def require_password(cls, v: str) -> str:
		if not v:
			raise ValueError("Password is required")
		return v


class UserProfileUpdate(BaseModel):
	profile_picture: str = ""
	signature: str = ""

	@field_validator("profile_picture")
	@classmethod
	def validate_profile_picture(cls, v: str) -> str:
		v = v.strip()
		if v and not v.startswith("http"):
			raise ValueError("Profile picture must be a valid URL starting with http")
		return v

	@field_validator("signature")
	@classmethod
	def validate_signature(cls, v: str) -> str:
		v = v.strip()
		if len(v) > 500:
			raise ValueError("Signature must be less than 500 characters")
		return v

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"profile_picture": "https://cdn.example.com/avatars/bookworm.jpg",
			"signature": "So many books, so little time.",
		}
	})


class AccountDeleteRequest(BaseModel):
	"""Typed username confirming an irreversible account deletion."""
	confirmation: str


class UserResponse(BaseModel):
	id: int
	username: str
	email: str
	profile_picture: str = ""
	signature: str = ""
	role: str
	status: str
	created_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class PublicUserResponse(BaseModel):
	"""User as shown to other forum members (no email)."""
	id: int
	username: str
	profile_picture: str = ""
	signature: str = ""
	role: str
	status: str
	created_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class UserStats(BaseModel):
	posts_count: int = 0
	comments_count: int = 0
	likes_received: int = 0


class UserWithStatsResponse(UserResponse):
	posts_count: int = 0
	comments_count: int = 0
	likes_received: int = 0


class LoginResponse(BaseModel):
	access_token: str
	token_type: str = "bearer"
	expires_at: datetime
	user: UserResponse


class ProfileResponse(BaseModel):
	"""Profile page: the member, their visible posts and activity counts."""
	user: PublicUserResponse
	posts: List[PostResponse]
	stats: UserStats
	is_own_profile: bool = False
