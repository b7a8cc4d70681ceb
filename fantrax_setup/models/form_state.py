from typing import Annotated, Mapping, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from fantrax_setup.utils.misc_utils import freeze_mapping

# Copied on validation and exposed read-only
FieldMap = Annotated[Mapping[str, str], AfterValidator(freeze_mapping)]


class FormFields(BaseModel):
    """Raw field values scraped straight from the setup form markup."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # <input type="hidden">, checked checkboxes, and the allow-listed text inputs
    hidden_fields: FieldMap = Field(default_factory=dict)
    # <select> name -> value of the selected <option>
    select_fields: FieldMap = Field(default_factory=dict)
    # Hidden checkbox shadows ("_" prefixed names), usually "on"
    checkbox_fields: FieldMap = Field(default_factory=dict)


class FormState(FormFields):
    """Every value that has to be echoed back when the setup form is POSTed."""

    # teamId -> name / short name, taken from the team declarations
    team_names: FieldMap = Field(default_factory=dict)
    team_short_names: FieldMap = Field(default_factory=dict)
    # "teamOwnerEmail,{email},{teamId},{userId}" -> email
    owner_email_fields: FieldMap = Field(default_factory=dict)
    # divisionId -> division name
    division_names: FieldMap = Field(default_factory=dict)
    # One "divId=team1|team2|..." entry per non-empty division
    division_memberships: Tuple[str, ...] = ()
