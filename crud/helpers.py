from bson import ObjectId
from crud.exceptions import InvalidInput

def clean_object_ids(obj):
    """Recursively convert ObjectId to string in nested dicts/lists."""
    if isinstance(obj, dict):
        return {
            key: clean_object_ids(str(value) if isinstance(value, ObjectId) else value)
            for key, value in obj.items()
        }
    elif isinstance(obj, list):
        return [clean_object_ids(str(item) if isinstance(item, ObjectId) else item) for item in obj]
    return obj

def to_object_id(value: str, kind: str = "record") -> ObjectId:
    """Parse a path identifier, rejecting anything that is not a valid ObjectId."""
    if not ObjectId.is_valid(value):
        raise InvalidInput(f"Invalid {kind} id", value)
    return ObjectId(value)
