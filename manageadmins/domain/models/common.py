"""Defines common Value Objects used across the administration domain.

These objects represent simple values like organization ids, admin ids,
email addresses and privilege levels, ensuring consistency and type safety.
"""

from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
OrganizationId = NewType("OrganizationId", str)   # Opaque dashboard organization id
AdminId = NewType("AdminId", str)                 # Opaque admin id, assigned by the API
EmailAddress = NewType("EmailAddress", str)       # Business identity of an administrator
PrivilegeLevel = NewType("PrivilegeLevel", str)   # orgAccess value, e.g. 'full', 'read-only'
OrganizationFilter = NewType("OrganizationFilter", str)  # '/all' or a name substring

# === Privilege levels ===
PRIVILEGE_FULL = PrivilegeLevel("full")
PRIVILEGE_READ_ONLY = PrivilegeLevel("read-only")
DEFAULT_PRIVILEGE = PRIVILEGE_FULL

# Only these levels may be granted by the 'add' command.
SUPPORTED_ADD_PRIVILEGES = (PRIVILEGE_FULL, PRIVILEGE_READ_ONLY)

# Organization filter value that matches every organization.
ALL_ORGANIZATIONS = OrganizationFilter("/all")
