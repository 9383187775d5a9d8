"""
Portfolio API - Entity Schemas
==============================

What:  Pydantic models describing what a client may store in each collection.
How:   FastAPI validates request bodies against these models. Unknown fields
       and missing required fields are rejected with 400 invalid_input.
       Only the fields a client actually sent are written to MongoDB
       (`model_dump(exclude_unset=True)`), so a stored document mirrors the
       submitted body.

Collections:
    ProjectCreate / ProjectUpdate  → projects
    SkillCreate                    → skills
    BackendSkillCreate             → backendSkills (bulk insert)
    ContactCreate                  → contacts
    BlogCreate                     → blogs
"""

from typing import List, Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class DocumentModel(BaseModel):
    """Base for every stored entity: unknown fields are an error."""

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


# ══════════════════════════════════════════════════════════════════════════
# Projects
# ══════════════════════════════════════════════════════════════════════════


class ProjectCreate(DocumentModel):
    name: str = Field(min_length=1, max_length=200, description="Project title")
    description: str = Field(min_length=1, description="What the project does")
    image: Optional[str] = Field(default=None, description="Cover image URL")
    category: Optional[str] = Field(default=None, description="e.g. fullstack, frontend")
    technologies: List[str] = Field(default_factory=list, description="Tech stack labels")
    features: List[str] = Field(default_factory=list, description="Feature bullet points")
    live_link: Optional[str] = Field(default=None, description="Deployed site URL")
    client_repo: Optional[str] = Field(default=None, description="Frontend repository URL")
    server_repo: Optional[str] = Field(default=None, description="Backend repository URL")


class ProjectUpdate(DocumentModel):
    """
    Partial project for PUT /projects/{id}.

    Every field is optional; the sent fields are merged into the stored
    document with `$set`. Fields that are omitted keep their stored value.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = None
    category: Optional[str] = None
    technologies: Optional[List[str]] = None
    features: Optional[List[str]] = None
    live_link: Optional[str] = None
    client_repo: Optional[str] = None
    server_repo: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Skills
# ══════════════════════════════════════════════════════════════════════════


class SkillCreate(DocumentModel):
    name: str = Field(min_length=1, max_length=100, description="Skill or tool name")
    image: Optional[str] = Field(default=None, description="Icon URL")
    level: Optional[str] = Field(default=None, description="e.g. beginner, advanced")
    category: Optional[str] = Field(default=None, description="e.g. language, framework")


class BackendSkillCreate(SkillCreate):
    pass


# ══════════════════════════════════════════════════════════════════════════
# Contacts & Blogs
# ══════════════════════════════════════════════════════════════════════════


class ContactCreate(DocumentModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    subject: Optional[str] = Field(default=None, max_length=300)
    message: str = Field(min_length=1, max_length=5000)


class BlogCreate(DocumentModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    author: Optional[str] = None
    image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    published_at: Optional[str] = Field(default=None, description="ISO 8601 date")
