"""create_specialist_directory

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 10:00:00.000000

스페셜리스트 디렉터리 스키마 생성.
media, platform_fee, specialists, service_offerings 테이블과 상태 enum, 인덱스.
specialists.logo_id ↔ media.specialist_id 순환 참조는 두 테이블 생성 후 FK 추가.
Create the specialist directory schema: media, platform_fee, specialists,
service_offerings, the status/media-type enums and indexes. The circular
specialists.logo_id / media.specialist_id references are added once both
tables exist.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM, UUID


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

specialist_status = ENUM('draft', 'published', name='specialist_status', create_type=False)
media_type = ENUM('logo', 'document', 'image', name='media_type', create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    specialist_status.create(bind, checkfirst=True)
    media_type.create(bind, checkfirst=True)

    # platform_fee — 수수료 정의 (Fee rate definitions)
    op.create_table(
        'platform_fee',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('fee_name', sa.String(100), nullable=False),
        sa.Column('fee_percentage', sa.Numeric(5, 2), nullable=True),
        sa.Column('fee_fixed_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # media — specialist_id FK는 specialists 생성 후 추가
    # Media metadata; the specialist_id FK is added after specialists exists
    op.create_table(
        'media',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('specialist_id', UUID(as_uuid=True), nullable=True),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_url', sa.String(1000), nullable=False),
        sa.Column('file_type', sa.String(50), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('media_type', media_type, nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_media_specialist', 'media', ['specialist_id'])
    op.create_index('idx_media_type', 'media', ['media_type'])

    # specialists — 애그리거트 루트 (Aggregate root)
    op.create_table(
        'specialists',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', specialist_status, server_default='draft', nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=False, unique=True),
        sa.Column('contact_phone', sa.String(50), nullable=True),
        sa.Column('website_url', sa.String(500), nullable=True),
        sa.Column('logo_id', UUID(as_uuid=True), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_specialists_status', 'specialists', ['status'])
    op.create_index('idx_specialists_name', 'specialists', ['name'])

    # 순환 FK — Circular foreign keys
    op.create_foreign_key(
        'fk_specialists_logo_id', 'specialists', 'media',
        ['logo_id'], ['id'], ondelete='SET NULL',
    )
    op.create_foreign_key(
        'fk_media_specialist_id', 'media', 'specialists',
        ['specialist_id'], ['id'], ondelete='SET NULL',
    )

    # service_offerings — 스페셜리스트 소유 (Owned by a specialist)
    op.create_table(
        'service_offerings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('specialist_id', UUID(as_uuid=True), sa.ForeignKey('specialists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_name', sa.String(255), nullable=False),
        sa.Column('service_type', sa.String(100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('platform_fee_id', UUID(as_uuid=True), sa.ForeignKey('platform_fee.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_service_specialist', 'service_offerings', ['specialist_id'])


def downgrade() -> None:
    op.drop_index('idx_service_specialist', table_name='service_offerings')
    op.drop_table('service_offerings')

    op.drop_constraint('fk_media_specialist_id', 'media', type_='foreignkey')
    op.drop_constraint('fk_specialists_logo_id', 'specialists', type_='foreignkey')

    op.drop_index('idx_specialists_name', table_name='specialists')
    op.drop_index('idx_specialists_status', table_name='specialists')
    op.drop_table('specialists')

    op.drop_index('idx_media_type', table_name='media')
    op.drop_index('idx_media_specialist', table_name='media')
    op.drop_table('media')

    op.drop_table('platform_fee')

    bind = op.get_bind()
    media_type.drop(bind, checkfirst=True)
    specialist_status.drop(bind, checkfirst=True)
