"""Project submission template: tells admins a client submitted a project."""

from engagement.notification.notification import NotificationType


class ProjectSubmissionTemplate:
    notification_type = NotificationType.PROJECT_SUBMISSION.value

    @staticmethod
    def render(context: dict) -> dict:
        client_name = context.get("client_name", "A client")
        project_name = context["project_name"]
        return {
            "title": "New project submitted",
            "message": f'{client_name} submitted a new project: "{project_name}"',
            "data": {
                "project_id": context["project_id"],
                "project_name": project_name,
                "client_id": context.get("client_id"),
                "client_name": client_name,
            },
        }
