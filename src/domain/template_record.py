"""Template Record Domain Entity

Persisted form of an invoice template saved from the designer.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.template import Template


class TemplateRecord(BaseModel, table=True):
    """
    Template Record - Serialized template keyed by id

    Domain Rules:
    - definition holds the template JSON exactly as the designer sends it (camelCase)
    - id is the template's own id; saving an existing id replaces it
    """

    __tablename__ = "invoice_templates"
    __table_args__ = (
        Index('ix_invoice_templates_shop_id', 'shop_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(64), primary_key=True),
        description="Template identifier"
    )

    name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Display name"
    )

    shop_id: Optional[str] = Field(
        default=None,
        description="Owning shop, when templates are scoped per shop"
    )

    definition: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Template JSON"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last save timestamp"
    )

    @classmethod
    def from_template(cls, template: Template, shop_id: Optional[str] = None) -> "TemplateRecord":
        return cls(
            id=template.id or generate_uuid(),
            name=template.name,
            shop_id=shop_id,
            definition=template.model_dump_json(by_alias=True),
        )

    def to_template(self) -> Template:
        template = Template.model_validate_json(self.definition)
        if template.id != self.id:
            template = template.model_copy(update={"id": self.id})
        return template
