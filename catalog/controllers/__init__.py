from catalog.controllers.results import ErrorKind, Failure, Outcome, Redirect, Render

__all__ = ["ErrorKind", "Failure", "Outcome", "Redirect", "Render"]
