from pydantic import BaseModel

class UpdateResult(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int

class DeleteResult(BaseModel):
    acknowledged: bool = True
    deletedCount: int
