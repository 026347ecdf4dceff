"""Form document envelope models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from formbridge.typing.models.component import Component


class FormDocument(BaseModel):
    """A form definition as exchanged with the designer and the client UI.

    ``components`` is a flat, parent-pointer addressed list when the document
    comes from the designer, and a forest once it has been nested for display.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    process_name: str | None = Field(default=None, alias="processName")
    process_label: str | None = Field(default=None, alias="processLabel")
    form_name: str | None = Field(default=None, alias="formName")
    form_label: str | None = Field(default=None, alias="formLabel")
    components: list[Component] = Field(default_factory=list, alias="componentsList")
