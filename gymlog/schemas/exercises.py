from pydantic import BaseModel, ConfigDict, Field


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)
    category: str = Field(min_length=1, max_length=60)
    muscle_group: str = Field(min_length=1, max_length=60)
    description: str | None = None


class ExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    muscle_group: str
    description: str


class CategoriesOut(BaseModel):
    categories: list[str]
    muscle_groups: list[str]


class MessageOut(BaseModel):
    message: str
