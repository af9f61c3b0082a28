from models.schools import School
from models.teachers import Teacher
from models.classes import Class
from models.attendance import AttendanceRecord

__all__ = ["School", "Teacher", "Class", "AttendanceRecord"]
