"""Constants for the fill-in planner."""

# Day names accepted in availability strings and slot records
VALID_DAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

# Step used when expanding "start-end" availability ranges
AVAILABILITY_STEP_MINUTES = 30

# Group sizes
SOLO = 1
PAIRED = 2

# Stored capacity used when the slot record carries an invalid value
DEFAULT_CAPACITY = 3

# Daily status values attached to a slot instance
STATUS_MARKED_ABSENT = "marked_absent"
STATUS_ASSIGNED_FILL_IN = "assigned_fill_in"

# Default data directory and file names for the source loaders
DEFAULT_DATA_DIR = "data"
STUDENTS_JSON = "students.json"
STUDENTS_CSV = "students.csv"
SLOTS_JSON = "slots.json"
BLOCKS_JSON = "blocks.json"
BLOCKS_CSV = "blocks.csv"
STATUSES_JSON = "daily-statuses.json"

# Field name variants produced by the hosted database, in lookup order
STUDENT_FIELD_ALIASES = {
    "id": ["id", "student_id"],
    "name": ["name", "Name"],
    "group_of": ["group_of", "groupOf"],
    "sub_group": ["sub_group", "subGroup"],
    "lessons_owed": ["lessons_owed", "lessons owed", "lessonsOwed"],
    "availability_string": ["availability_string", "availabilityString", "availability"],
    "class_name": ["class_name", "className"],
    "is_active": ["is_active", "isActive"],
}

SLOT_FIELD_ALIASES = {
    "schedule_id": ["schedule_id", "scheduleId", "id"],
    "day_of_week": ["day_of_week", "dayOfWeek"],
    "start_time": ["start_time", "startTime", "time_slot"],
    "capacity": ["capacity"],
    "coach_id": ["coach_id", "coachId"],
    "coach_name": ["coach_name", "coachName"],
    "original_student_ids": ["original_student_ids", "originalStudentIds"],
    "current_occupant_ids": ["current_occupant_ids", "currentOccupantIds"],
    "slot_date": ["slot_date", "slotDate"],
}

BLOCK_FIELD_ALIASES = {
    "block_date": ["block_date", "blockDate"],
    "block_type": ["block_type", "blockType"],
    "identifier": ["identifier"],
    "reason": ["reason"],
}

STATUS_FIELD_ALIASES = {
    "student_id": ["student_id", "studentId"],
    "schedule_id": ["schedule_id", "lesson_schedule_id", "scheduleId", "lessonScheduleId"],
    "status_date": ["status_date", "statusDate"],
    "status": ["status"],
}

# Human-readable labels for group sizes
GROUP_SIZE_LABELS = {
    SOLO: "Solo",
    PAIRED: "Paired",
}
GROUP_LABEL = "Group"
UNKNOWN_GROUP_LABEL = "N/A"
