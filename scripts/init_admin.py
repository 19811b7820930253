"""Create the default admin actor (run once after init_db.py)."""
from __future__ import annotations

from attendance_portal.container import build_container
from attendance_portal.core.enums import Role
from attendance_portal.main import load_settings


def main() -> None:
    settings = load_settings()
    container = build_container(db_config=dict(settings.DB_CONFIG), jwt_secret=settings.JWT_SECRET)

    admin = dict(settings.DEFAULT_ADMIN)
    user, created = container.user_service.ensure_user(role=Role.ADMIN, **admin)
    if not created:
        print(f"Admin user already exists: {user.email}")
        return

    print("Admin user created successfully")
    print(f"Email: {user.email}")
    print(f"Password: {admin['password']}")
    print("IMPORTANT: Please change this password after first login!")


if __name__ == "__main__":
    main()
