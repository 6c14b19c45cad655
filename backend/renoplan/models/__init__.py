from renoplan.models.project_plan import PlanStatus, ProjectPlanRecord

__all__ = ["PlanStatus", "ProjectPlanRecord"]
