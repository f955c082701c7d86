"""Project created template: a project was opened for the client."""

from engagement.notification.notification import NotificationType


class ProjectCreatedTemplate:
    notification_type = NotificationType.PROJECT_CREATED.value

    @staticmethod
    def render(context: dict) -> dict:
        project_name = context["project_name"]
        return {
            "title": "New project created",
            "message": f'A new project "{project_name}" was created for you.',
            "data": {"project_id": context["project_id"], "project_name": project_name},
        }
