from person_registry.models.person import Person

__all__ = ["Person"]
