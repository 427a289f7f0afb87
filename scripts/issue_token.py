"""
Issue a bearer token for local use (kiosk/admin account or an employee).
Login is handled outside this service; this only signs claims with JWT_SECRET_KEY.

Usage:
  python scripts/issue_token.py admin ADMIN
  python scripts/issue_token.py 3            # employee id 3, role EMPLOYEE
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.security import create_access_token  # noqa: E402
from app.models.employee import Role  # noqa: E402


def main() -> int:
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        return 1
    subject = sys.argv[1]
    role = sys.argv[2].upper() if len(sys.argv) > 2 else Role.EMPLOYEE.value
    if role not in {r.value for r in Role}:
        print(f"Unknown role {role!r}; expected one of {[r.value for r in Role]}", file=sys.stderr)
        return 1
    print(create_access_token({"sub": subject, "role": role}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
