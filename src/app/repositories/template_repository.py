"""Template Repository Interface

Defines the contract for invoice template persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.template import Template


class TemplateRepository(ABC):
    """
    Repository interface for Template persistence

    Templates are owned by the designer; the PDF engine only reads them.
    """

    @abstractmethod
    async def get(self, template_id: str) -> Optional[Template]:
        """
        Retrieve template by ID

        Args:
            template_id: Template ID

        Returns:
            Template if found, None otherwise
        """
        pass

    @abstractmethod
    async def put(self, template: Template, shop_id: Optional[str] = None) -> Template:
        """
        Save a template, replacing any template with the same ID

        Args:
            template: Template to persist (an ID is generated when missing)
            shop_id: Optional owning shop

        Returns:
            Saved Template with its ID
        """
        pass

    @abstractmethod
    async def delete(self, template_id: str) -> bool:
        """
        Delete template by ID

        Args:
            template_id: Template ID

        Returns:
            True if a template was deleted, False if none existed
        """
        pass
