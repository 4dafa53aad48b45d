"""
Custom exceptions for the gmao application.

This module defines all custom exceptions used throughout the gmao application.
Each exception has a specific error code, status code, and default message.
"""

from rest_framework import status
from rest_framework.exceptions import APIException

from core.common.error_codes import CommonAPIErrorCodes, MaintenanceErrorCodes


class GMAOBaseException(APIException):
    """
    Base exception for all gmao exceptions.

    All custom exceptions should inherit from this class to ensure consistent
    error handling and response formatting.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "An unexpected error occurred."
    default_code = CommonAPIErrorCodes.INTERNAL_SERVER_ERROR


class ValidationException(GMAOBaseException):
    """
    Exception raised when validation fails.

    This exception should be used when input data fails validation checks,
    such as a missing mileage reading or insufficient stock.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed."
    default_code = CommonAPIErrorCodes.VALIDATION_ERROR


class BusinessLogicException(GMAOBaseException):
    """
    Exception raised when a business logic rule is violated.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Business logic error."
    default_code = CommonAPIErrorCodes.BUSINESS_LOGIC_ERROR


class OperationNotAllowedException(BusinessLogicException):
    """
    Exception raised when an operation is not allowed.

    This exception should be used for illegal work order transitions and for
    part changes on a completed or cancelled work order.
    """
    default_detail = "Operation not allowed."
    default_code = CommonAPIErrorCodes.OPERATION_NOT_ALLOWED


class GenerationException(GMAOBaseException):
    """
    Exception raised when generating a work order from a plan fails.

    The generation transaction is rolled back; the batch logs it and moves on
    to the next plan.
    """
    default_detail = "Work order generation failed."
    default_code = CommonAPIErrorCodes.DATABASE_ERROR


class ConsistencyViolationException(GMAOBaseException):
    """
    Exception raised when a stored invariant no longer holds,
    e.g. total_cost != labor_cost + parts_cost.

    This is a programming error and must never be caught by callers.
    """
    default_detail = "Work order cost totals are inconsistent."
    default_code = MaintenanceErrorCodes.COST_INCONSISTENCY
