"""Resource schemas and collection envelopes for the 10,000ft API."""

from tenkft_client.models.base import (
    ALWAYS,
    OMIT_IF_DEFAULT,
    Collection,
    Paging,
    Resource,
    server,
    writable,
    write_view,
)
from tenkft_client.models.resources import (
    Assignment,
    Assignments,
    BillRate,
    BillRates,
    LeaveType,
    LeaveTypes,
    Phase,
    Phases,
    Project,
    Projects,
    Role,
    Roles,
    Tag,
    Tags,
    User,
    Users,
)

__all__ = [
    "ALWAYS",
    "OMIT_IF_DEFAULT",
    "Assignment",
    "Assignments",
    "BillRate",
    "BillRates",
    "Collection",
    "LeaveType",
    "LeaveTypes",
    "Paging",
    "Phase",
    "Phases",
    "Project",
    "Projects",
    "Resource",
    "Role",
    "Roles",
    "Tag",
    "Tags",
    "User",
    "Users",
    "server",
    "writable",
    "write_view",
]
