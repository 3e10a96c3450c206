"""Source and report generation."""

from .class_file import ClassFile, ClassFileGenerator
from .report import ReportGenerator

__all__ = ["ClassFile", "ClassFileGenerator", "ReportGenerator"]
