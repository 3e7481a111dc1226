from .ratemyprof import RateMyProfClient, RateMyProfError, TeacherNode

__all__ = ["RateMyProfClient", "RateMyProfError", "TeacherNode"]
