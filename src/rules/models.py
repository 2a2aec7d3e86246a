from pydantic import BaseModel, Field, model_validator

from src.domain.entities import PostStatus, RoleType


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class RbacRules(BaseModel):
    roles: dict[RoleType, list[str]]
    public_permissions: list[str] = Field(default_factory=list)

class WorkflowRoleRules(BaseModel):
    default_status: PostStatus
    # requested status -> status actually stored
    downgrade: dict[PostStatus, PostStatus] = Field(default_factory=dict)

class PostRules(BaseModel):
    excerpt_length: int = Field(297, gt=0)
    excerpt_suffix: str = "..."
    default_genre: str = "General"
    rating_min: float = 1
    rating_max: float = 5

    @model_validator(mode="after")
    def _check_rating_bounds(self) -> "PostRules":
        if self.rating_min > self.rating_max:
            raise ValueError("rating_min must not exceed rating_max")
        return self

class FeedRules(BaseModel):
    default_limit: int = Field(10, gt=0)
    max_limit: int = Field(100, gt=0)

    @model_validator(mode="after")
    def _check_limits(self) -> "FeedRules":
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit must not exceed max_limit")
        return self

class OpsRules(BaseModel):
    data_dir_required: bool = True
    required_env: list[str] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    rbac: RbacRules
    workflow: dict[RoleType, WorkflowRoleRules]
    posts: PostRules = Field(default_factory=PostRules)
    feed: FeedRules = Field(default_factory=FeedRules)
    ops: OpsRules = Field(default_factory=OpsRules)
