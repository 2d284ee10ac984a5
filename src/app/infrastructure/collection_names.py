"""Names of the record store collections."""

CLIENTS = "clients"
PROJECTS = "projects"
TASKS = "tasks"

ALL_COLLECTIONS = (CLIENTS, PROJECTS, TASKS)
