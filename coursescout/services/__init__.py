from .professor_service import ProfessorService

__all__ = ["ProfessorService"]
