import logging
import re
from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from storefront.auth import jwt_handler
from storefront.auth.dependencies import admin_only, get_settings, require_sign_in, signed_in
from storefront.auth.password import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    hash_password,
    password_too_long,
    verify_password,
)
from storefront.core.config import Settings
from storefront.core.errors import InternalError, NotFound, StoreError, ValidationError
from storefront.crud import users as user_store
from storefront.database import get_db

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^\d{1,15}$')
PASSWORD_LENGTH_MESSAGE = f'Password is required and {MIN_PASSWORD_LENGTH} character long'
PASSWORD_TOO_LONG_MESSAGE = f'Password must not exceed {MAX_PASSWORD_BYTES} bytes'


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    address: str | None = None
    answer: str | None = None
    dob: str | None = Field(default=None, alias='DOB')

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: str | None = None
    answer: str | None = None
    new_password: str | None = Field(default=None, alias='newPassword')

    class Config:
        populate_by_name = True


class ProfileUpdateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    address: str | None = None

    @field_validator('name', 'email', 'password', 'phone', 'address')
    @classmethod
    def blank_means_unchanged(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value


def parse_date_of_birth(value: str) -> date:
    normalized = value.strip()
    try:
        dob = date.fromisoformat(normalized)
    except ValueError:
        try:
            dob = datetime.fromisoformat(normalized).date()
        except ValueError as exc:
            raise ValidationError('Valid Date of Birth is Required') from exc

    if dob > date.today():
        raise ValidationError('Date of Birth cannot be in the future')
    return dob


def validate_registration(data: RegisterRequest) -> date:
    required_fields = [
        ('name', 'Name'),
        ('email', 'Email'),
        ('password', 'Password'),
        ('phone', 'Phone no'),
        ('address', 'Address'),
        ('answer', 'Answer'),
        ('dob', 'DOB'),
    ]
    for attribute, label in required_fields:
        if not getattr(data, attribute):
            raise ValidationError(f'{label} is Required')

    if not EMAIL_PATTERN.match(data.email):
        raise ValidationError('Valid email is Required')

    if not PHONE_PATTERN.match(data.phone):
        raise ValidationError('Phone number must not exceed 15 digits and can contain only numbers')

    dob = parse_date_of_birth(data.dob)
    validate_new_password(data.password)
    return dob


def validate_new_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(PASSWORD_LENGTH_MESSAGE)
    if password_too_long(password):
        raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)


def hash_or_fail(password: str, settings: Settings, failure_message: str) -> str:
    password_hash = hash_password(password, rounds=settings.BCRYPT_ROUNDS)
    if not password_hash:
        raise InternalError(failure_message)
    return password_hash


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    dob = validate_registration(data)

    try:
        if user_store.find_user_by_email(db, data.email) is not None:
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={'success': False, 'message': 'Already registered, please login'},
            )

        password_hash = hash_or_fail(data.password, settings, 'Error in Registration')
        user = user_store.create_user(
            db,
            name=data.name,
            email=data.email,
            password_hash=password_hash,
            phone=data.phone,
            address=data.address,
            answer=data.answer,
            dob=dob,
        )
    except StoreError as exc:
        logger.exception('Registration failed')
        raise InternalError('Error in Registration') from exc

    logger.info('Registered user %s', user.id)
    return {
        'success': True,
        'message': 'User Registered Successfully',
        'user': user_store.public_user(user),
    }


@router.post('/login')
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not data.email or not data.password:
        raise ValidationError('Invalid email or password')

    try:
        user = user_store.find_user_by_email(db, data.email)
    except StoreError as exc:
        logger.exception('Login lookup failed')
        raise InternalError('Error in login') from exc

    if user is None:
        raise NotFound('Email is not registered')

    if not verify_password(data.password, user.password_hash):
        return {'success': False, 'message': 'Invalid Password'}

    token = jwt_handler.create_access_token(
        user.id,
        user.role,
        secret=settings.JWT_SECRET_KEY,
        expires_delta=timedelta(minutes=settings.JWT_EXPIRES_MINUTES),
        algorithm=settings.JWT_ALGORITHM,
    )
    return {
        'success': True,
        'message': 'Login successfully',
        'user': user_store.public_user(user),
        'token': token,
    }


@router.post('/forgot-password')
def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not data.email:
        raise ValidationError('Email is required')
    if not data.answer:
        raise ValidationError('Answer is required')
    if not data.new_password:
        raise ValidationError('New Password is required')
    validate_new_password(data.new_password)

    try:
        user = user_store.find_user_by_email_and_answer(db, data.email, data.answer)
        if user is None:
            raise NotFound('Wrong Email Or Answer')

        password_hash = hash_or_fail(data.new_password, settings, 'Something went wrong')
        user_store.update_user_by_id(db, user.id, password_hash=password_hash)
    except StoreError as exc:
        logger.exception('Password reset failed')
        raise InternalError('Something went wrong') from exc

    logger.info('Password reset for user %s', user.id)
    return {'success': True, 'message': 'Password Reset Successfully'}


@router.put('/profile')
def update_profile(
    data: ProfileUpdateRequest,
    claims: jwt_handler.TokenClaims = Depends(require_sign_in),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    password_hash = None
    if data.password is not None:
        validate_new_password(data.password)
        password_hash = hash_or_fail(data.password, settings, 'Error While Updating Profile')

    try:
        user = user_store.update_user_by_id(
            db,
            claims.user_id,
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            password_hash=password_hash,
        )
    except StoreError as exc:
        logger.exception('Profile update failed for user %s', claims.user_id)
        raise InternalError('Error While Updating Profile') from exc

    if user is None:
        raise NotFound('User not found')

    return {
        'success': True,
        'message': 'Profile Updated Successfully',
        'updatedUser': user_store.public_user(user),
    }


@router.get('/user-auth', dependencies=signed_in)
def user_auth():
    return {'ok': True}


@router.get('/admin-auth', dependencies=admin_only)
def admin_auth():
    return {'ok': True}


@router.get('/test', dependencies=admin_only)
def protected_test():
    return 'Protected Routes'
