from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str = "logic-looper"
    rules_version: str = "1"


class PuzzleRules(BaseModel):
    # Bumping seed_version changes every future puzzle; past dates keep theirs.
    namespace: str = "logic-looper"
    seed_version: str = "v1"


class ScoringRules(BaseModel):
    base_per_difficulty: int = Field(default=100, ge=0)
    time_bonus_window_seconds: int = Field(default=300, ge=0)
    hint_penalty: int = Field(default=25, ge=0)
    min_score: int = Field(default=10, ge=1)


class HintRules(BaseModel):
    max_per_day: int = Field(default=3, ge=0)


class StorageRules(BaseModel):
    backend: str = Field(default="sqlite", pattern="^(memory|file|sqlite)$")
    data_dir: str = "./data"
    filename: str = "looper.db"
    activity_key: str = "logic-looper-activity"
    state_key_prefix: str = "logic-looper-state"
    token_key: str = "token"


class SyncRules(BaseModel):
    enabled: bool = True
    api_url: str = "http://localhost:5000/api"
    timeout_seconds: float = Field(default=10.0, gt=0)
    token_env: str = "LOGIC_LOOPER_TOKEN"


class OpsRules(BaseModel):
    data_dir_required: bool = False
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules = Field(default_factory=ProjectRules)
    puzzle: PuzzleRules = Field(default_factory=PuzzleRules)
    scoring: ScoringRules = Field(default_factory=ScoringRules)
    hints: HintRules = Field(default_factory=HintRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    sync: SyncRules = Field(default_factory=SyncRules)
    ops: OpsRules = Field(default_factory=OpsRules)
