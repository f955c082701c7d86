"""Project refused template: carries the refusal reason back to the client."""

from engagement.notification.notification import NotificationType


class ProjectRefusedTemplate:
    notification_type = NotificationType.PROJECT_REFUSED.value

    @staticmethod
    def render(context: dict) -> dict:
        project_name = context["project_name"]
        reason = context.get("reason") or "No reason given"
        return {
            "title": "Project refused",
            "message": f'Your project "{project_name}" was refused. Reason: {reason}',
            "data": {
                "project_id": context["project_id"],
                "project_name": project_name,
                "reason": reason,
            },
        }
