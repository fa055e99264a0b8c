from typing import Annotated

from fastapi import Depends, Request

from bizdir.config import Settings
from bizdir.services.directory import DirectoryService
from bizdir.services.duplicate_detection import DuplicateDetectionService
from bizdir.services.moderation import ModerationService
from bizdir.services.submission_intake import SubmissionIntakeService
from bizdir.storage.base import BusinessStore
from bizdir.storage.images import LocalImageStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_intake_service(request: Request) -> SubmissionIntakeService:
    return request.app.state.intake_service


def get_moderation_service(request: Request) -> ModerationService:
    return request.app.state.moderation_service


def get_duplicate_service(request: Request) -> DuplicateDetectionService:
    return request.app.state.duplicate_service


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service


def get_business_store(request: Request) -> BusinessStore:
    return request.app.state.store.businesses


def get_image_store(request: Request) -> LocalImageStore:
    return request.app.state.image_store


SettingsDep = Annotated[Settings, Depends(get_settings)]
IntakeDep = Annotated[SubmissionIntakeService, Depends(get_intake_service)]
ModerationDep = Annotated[ModerationService, Depends(get_moderation_service)]
DuplicatesDep = Annotated[DuplicateDetectionService, Depends(get_duplicate_service)]
DirectoryDep = Annotated[DirectoryService, Depends(get_directory_service)]
BusinessStoreDep = Annotated[BusinessStore, Depends(get_business_store)]
ImageStoreDep = Annotated[LocalImageStore, Depends(get_image_store)]
