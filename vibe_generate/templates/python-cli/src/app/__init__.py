"""{{project-name}} application package."""

PROJECT_NAME = "{{project-name}}"
