"""Project assignment template."""

from engagement.notification.notification import NotificationType


class ProjectAssignmentTemplate:
    notification_type = NotificationType.PROJECT_ASSIGNMENT.value

    @staticmethod
    def render(context: dict) -> dict:
        project_name = context["project_name"]
        lead = context.get("message") or "You were assigned to a project"
        return {
            "title": "Project assignment",
            "message": f'{lead}: "{project_name}"',
            "data": {"project_id": context["project_id"], "project_name": project_name},
        }
