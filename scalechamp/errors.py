# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0


class ScaleChampException(Exception):
    """Base exception for ScaleChamp provider errors."""


class ConfigurationException(ScaleChampException):
    """Raised when the provider configuration is invalid or incomplete."""


class ResourceTypeNotFoundException(ScaleChampException):
    """Raised when a resource type is not registered with the provider."""


class RemoteException(ScaleChampException):
    """Raised when a call to the ScaleChamp API fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ServiceUnavailableException(RemoteException):
    """Raised when the ScaleChamp API cannot be reached."""


class PlanNotFoundException(RemoteException):
    """Raised when no plan matches the requested cloud, region and name."""


class InstanceNotFoundException(RemoteException):
    """Raised when the requested instance does not exist."""


class ProvisioningFailedException(ScaleChampException):
    """Raised when an instance reaches the failed state."""

    def __init__(self, instance_id: str):
        super().__init__(f"Instance {instance_id} failed to provision")
        self.instance_id = instance_id


class FieldSetError(ScaleChampException):
    """Raised when a value cannot be written to a resource field."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Cannot set field {key!r}: {reason}")
        self.key = key
        self.reason = reason


class ComputedFieldsError(ExceptionGroup):
    """Raised when one or more computed fields could not be written back."""
