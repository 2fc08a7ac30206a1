from pydantic import BaseModel, Field
from typing import Dict, List

class DataQualityIssue(BaseModel):
    # kind is a short machine tag, e.g. "foreign_key", "tied_score", "def_pos"
    kind: str
    table: str
    message: str
    count: int = Field(1, ge=0)
    examples: List[str] = Field(default_factory=list)

class StageResult(BaseModel):
    name: str
    ok: bool = True
    rows: Dict[str, int] = Field(default_factory=dict)
    issues: List[DataQualityIssue] = Field(default_factory=list)

class PipelineReport(BaseModel):
    db_path: str
    stages: List[StageResult] = Field(default_factory=list)
    table_counts: Dict[str, int] = Field(default_factory=dict)
    completed: bool = False

    @property
    def issues(self) -> List[DataQualityIssue]:
        out: List[DataQualityIssue] = []
        for s in self.stages:
            out.extend(s.issues)
        return out

    @property
    def ok(self) -> bool:
        return self.completed and all(s.ok for s in self.stages)
