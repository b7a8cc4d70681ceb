from enum import Enum


class ParseStage(str, Enum):
    SCHEDULE = "schedule"
    TEAMS = "teams"
    DIVISIONS = "divisions"
    FORM_STATE = "form_state"
