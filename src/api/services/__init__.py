# This file marks the services package for directory business logic.
# Services read and write through the fallback resolver so routers never touch sessions directly.
