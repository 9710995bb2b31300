from .abstract_variable import AbstractVariableSet, Bounds

from .contact_schedule import ContactSchedule, ContactScheduleObserver
