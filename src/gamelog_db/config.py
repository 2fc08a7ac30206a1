from pathlib import Path
from typing import Optional

from pydantic import BaseModel
import yaml

DEFAULT_SETTINGS_PATH = "config/settings.example.yaml"

class Settings(BaseModel):
    game_log_path: str
    park_codes_path: str
    person_codes_path: str
    team_codes_path: str
    appearance_type_path: Optional[str] = None
    db_path: str = "data/gamelog.db"
    keep_raw_tables: bool = False
    log_level: str = "INFO"

    @property
    def partial_db_path(self) -> str:
        return str(Path(self.db_path).with_name(Path(self.db_path).name + ".partial"))

def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> Settings:
    with open(path, "r") as f:
        y = yaml.safe_load(f) or {}
    i = y.get("inputs", {})
    o = y.get("output", {})
    run = y.get("run", {})
    return Settings(
        game_log_path=i.get("game_log"),
        park_codes_path=i.get("park_codes"),
        person_codes_path=i.get("person_codes"),
        team_codes_path=i.get("team_codes"),
        appearance_type_path=i.get("appearance_type"),
        db_path=o.get("db_path", "data/gamelog.db"),
        keep_raw_tables=run.get("keep_raw_tables", False),
        log_level=run.get("log_level", "INFO"),
    )
