"""Initial schema: settings, systems, emulators, software titles, file sets, releases

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FILE_TYPES = (
    'rom', 'disk_image', 'tape_image', 'memory_snapshot',
    'screenshot', 'manual_scan', 'cover_scan', 'document',
)


def _file_type() -> sa.Enum:
    return sa.Enum(*FILE_TYPES, name='filetype', native_enum=False, length=32)


def upgrade() -> None:
    """Create all tables."""

    # =========================================================================
    # SETTINGS
    # =========================================================================
    op.create_table(
        'setting',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('key')
    )

    # =========================================================================
    # SYSTEMS, EMULATORS
    # =========================================================================
    op.create_table(
        'system',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'emulator',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('executable', sa.Text(), nullable=False),
        sa.Column('extract_files', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'emulator_system',
        sa.Column('emulator_id', sa.Integer(), nullable=False),
        sa.Column('system_id', sa.Integer(), nullable=False),
        sa.Column('arguments', sa.Text(), nullable=False, server_default=''),
        sa.ForeignKeyConstraint(['emulator_id'], ['emulator.id']),
        sa.ForeignKeyConstraint(['system_id'], ['system.id']),
        sa.PrimaryKeyConstraint('emulator_id', 'system_id')
    )

    # =========================================================================
    # SOFTWARE TITLES, FILES
    # =========================================================================
    op.create_table(
        'software_title',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'file_info',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sha1_checksum', sa.String(length=40), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('archive_file_name', sa.String(length=255), nullable=False),
        sa.Column('file_type', _file_type(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sha1_checksum', 'file_type')
    )

    op.create_table(
        'file_set',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('file_set_name', sa.String(length=255), nullable=False),
        sa.Column('file_type', _file_type(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'file_set_file_info',
        sa.Column('file_set_id', sa.Integer(), nullable=False),
        sa.Column('file_info_id', sa.Integer(), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['file_set_id'], ['file_set.id']),
        sa.ForeignKeyConstraint(['file_info_id'], ['file_info.id']),
        sa.PrimaryKeyConstraint('file_set_id', 'file_info_id', 'file_name')
    )

    # =========================================================================
    # RELEASES
    # =========================================================================
    op.create_table(
        'release',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, server_default=''),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'release_software_title',
        sa.Column('release_id', sa.Integer(), nullable=False),
        sa.Column('software_title_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['release_id'], ['release.id']),
        sa.ForeignKeyConstraint(['software_title_id'], ['software_title.id']),
        sa.PrimaryKeyConstraint('release_id', 'software_title_id')
    )

    op.create_table(
        'release_file_set',
        sa.Column('release_id', sa.Integer(), nullable=False),
        sa.Column('file_set_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['release_id'], ['release.id']),
        sa.ForeignKeyConstraint(['file_set_id'], ['file_set.id']),
        sa.PrimaryKeyConstraint('release_id', 'file_set_id')
    )

    op.create_table(
        'release_system',
        sa.Column('release_id', sa.Integer(), nullable=False),
        sa.Column('system_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['release_id'], ['release.id']),
        sa.ForeignKeyConstraint(['system_id'], ['system.id']),
        sa.PrimaryKeyConstraint('release_id', 'system_id')
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('release_system')
    op.drop_table('release_file_set')
    op.drop_table('release_software_title')
    op.drop_table('release')
    op.drop_table('file_set_file_info')
    op.drop_table('file_set')
    op.drop_table('file_info')
    op.drop_table('software_title')
    op.drop_table('emulator_system')
    op.drop_table('emulator')
    op.drop_table('system')
    op.drop_table('setting')
