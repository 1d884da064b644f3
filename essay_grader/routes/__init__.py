# Routes package
from . import upload, folders, rubrics, assessments, grading, config

__all__ = ["upload", "folders", "rubrics", "assessments", "grading", "config"]
