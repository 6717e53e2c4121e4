from .template_repository import SqlAlchemyTemplateRepository

__all__ = [
    "SqlAlchemyTemplateRepository",
]
