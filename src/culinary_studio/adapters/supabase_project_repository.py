"""Supabase repository for projects and their member links."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.projects import MemberKind, Project, ProjectColor
from culinary_studio.services.projects import ProjectRepository


@dataclass
class SupabaseProjectRepository(ProjectRepository):
    client: Client

    def create_project(self, payload: dict[str, object]) -> Project:
        response = self.client.table("projects").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create project")
        return _parse_project(response.data[0])

    def list_projects(self, user_id: str) -> list[Project]:
        response = (
            self.client.table("projects")
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return [_parse_project(row) for row in response.data or []]

    def delete_project(self, user_id: str, project_id: str) -> None:
        (
            self.client.table("projects")
            .delete()
            .eq("id", project_id)
            .eq("user_id", user_id)
            .execute()
        )

    def set_project(
        self, kind: MemberKind, user_id: str, item_id: str, project_id: str | None
    ) -> None:
        """Point one recipe, pairing or cost sheet at a project, or at none."""
        (
            self.client.table(kind.value)
            .update({"project_id": project_id})
            .eq("id", item_id)
            .eq("user_id", user_id)
            .execute()
        )

    def unlink_all(self, kind: MemberKind, user_id: str, project_id: str) -> None:
        (
            self.client.table(kind.value)
            .update({"project_id": None})
            .eq("project_id", project_id)
            .eq("user_id", user_id)
            .execute()
        )


def _parse_project(row: dict[str, object]) -> Project:
    created_raw = row.get("created_at")
    updated_raw = row.get("updated_at")
    color_raw = row.get("color")
    return Project(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        color=(
            ProjectColor(color_raw)
            if color_raw in ProjectColor.__members__.values()
            else ProjectColor.ORANGE
        ),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        updated_at=(
            datetime.fromisoformat(updated_raw)
            if isinstance(updated_raw, str) and updated_raw
            else None
        ),
    )
