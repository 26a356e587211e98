from person_registry.services.person_service import PersonService

__all__ = ["PersonService"]
