"""Application-level exceptions surfaced by the global error handlers."""


class MissingProjectConfigurationError(Exception):
    """A project listed by the project directory has no settings record.

    Signals a data-integrity problem, not a transient condition.
    """

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"No project settings found for project ID {project_id}.")
