"""Factory for generating fake user data for testing."""

from datetime import datetime
from typing import Optional

from faker import Faker

from siteportal.domain.entities.audit import utcnow
from siteportal.domain.entities.user import UserData
from siteportal.domain.value_objects.permission_info import PermissionInfo

fake = Faker()

CURRENT_PASSWORD = "OldPass123"


def create_fake_user_data(
    hashed_password: str,
    id: Optional[int] = None,
    uuid: Optional[str] = None,
    name: Optional[str] = None,
    permission_info: Optional[PermissionInfo] = None,
    created_at: Optional[datetime] = None,
) -> UserData:
    """Create a fake UserData record for testing.

    Args:
        hashed_password (str): A real bcrypt hash; plaintext is rejected.
        id (Optional[int]): User ID, defaults to a random integer.
        uuid (Optional[str]): External uuid, defaults to a fake uuid4.
        name (Optional[str]): Name, defaults to a fake user name.
        permission_info (Optional[PermissionInfo]): Defaults to portal access only.
        created_at (Optional[datetime]): Creation timestamp, defaults to now.

    Returns:
        UserData: A fake user record.
    """
    return UserData(
        id=id if id is not None else fake.random_int(min=1, max=10000),
        uuid=uuid if uuid is not None else fake.uuid4(),
        name=name if name is not None else fake.unique.user_name(),
        hashed_password=hashed_password,
        permission_info=permission_info if permission_info is not None else PermissionInfo(site_portal_access=True),
        created_at=created_at if created_at is not None else utcnow(),
    )
