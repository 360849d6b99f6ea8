"""Initial migration

Revision ID: 001
Revises:
Create Date: 2025-11-13 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Profiles
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_profiles_username'), 'profiles', ['username'], unique=True)
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=False)
    op.create_index(op.f('ix_profiles_role'), 'profiles', ['role'], unique=False)

    # Subadmin permissions
    op.create_table(
        'subadmin_permissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('can_upload_documents', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('can_view_stats', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index(op.f('ix_subadmin_permissions_is_active'), 'subadmin_permissions', ['is_active'], unique=False)

    # Documents
    op.create_table(
        'documents',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=False),
        sa.Column('file_name', sa.String(length=512), nullable=False),
        sa.Column('file_path', sa.String(length=1024), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('file_type', sa.String(length=50), nullable=False),
        sa.Column('mime_type', sa.String(length=255), nullable=False),
        sa.Column('parent_document_id', sa.String(length=36), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['parent_document_id'], ['documents.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_documents_category'), 'documents', ['category'], unique=False)
    op.create_index(op.f('ix_documents_file_type'), 'documents', ['file_type'], unique=False)
    op.create_index(op.f('ix_documents_parent_document_id'), 'documents', ['parent_document_id'], unique=False)
    op.create_index(op.f('ix_documents_is_active'), 'documents', ['is_active'], unique=False)
    op.create_index(op.f('ix_documents_created_by'), 'documents', ['created_by'], unique=False)
    op.create_index('idx_documents_parent_category', 'documents', ['parent_document_id', 'category'], unique=False)

    # Document tags
    op.create_table(
        'document_tags',
        sa.Column('document_id', sa.String(length=36), nullable=False),
        sa.Column('tag', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('document_id', 'tag')
    )
    op.create_index(op.f('ix_document_tags_tag'), 'document_tags', ['tag'], unique=False)

    # Download logs
    op.create_table(
        'download_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('document_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('downloaded_at', sa.DateTime(), nullable=True),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('context', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_download_logs_document_id', 'download_logs', ['document_id', 'downloaded_at'], unique=False)
    op.create_index('idx_download_logs_user_id', 'download_logs', ['user_id', 'downloaded_at'], unique=False)
    op.create_index('idx_download_logs_downloaded_at', 'download_logs', ['downloaded_at'], unique=False)

    # User document versions
    op.create_table(
        'user_document_versions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('original_document_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('version_number', sa.Integer(), nullable=False),
        sa.Column('version_name', sa.String(length=255), nullable=True),
        sa.Column('exported_file_path', sa.String(length=1024), nullable=True),
        sa.Column('exported_file_size', sa.BigInteger(), nullable=True),
        sa.Column('exported_mime_type', sa.String(length=255), nullable=True),
        sa.Column('original_file_type', sa.String(length=50), nullable=False),
        sa.Column('is_draft', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['original_document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('original_document_id', 'user_id', 'version_number')
    )
    op.create_index(op.f('ix_user_document_versions_user_id'), 'user_document_versions', ['user_id'], unique=False)
    op.create_index(
        'idx_user_document_versions_user_created', 'user_document_versions', ['user_id', 'created_at'], unique=False
    )


def downgrade() -> None:
    op.drop_index('idx_user_document_versions_user_created', table_name='user_document_versions')
    op.drop_index(op.f('ix_user_document_versions_user_id'), table_name='user_document_versions')
    op.drop_table('user_document_versions')
    op.drop_index('idx_download_logs_downloaded_at', table_name='download_logs')
    op.drop_index('idx_download_logs_user_id', table_name='download_logs')
    op.drop_index('idx_download_logs_document_id', table_name='download_logs')
    op.drop_table('download_logs')
    op.drop_index(op.f('ix_document_tags_tag'), table_name='document_tags')
    op.drop_table('document_tags')
    op.drop_index('idx_documents_parent_category', table_name='documents')
    op.drop_index(op.f('ix_documents_created_by'), table_name='documents')
    op.drop_index(op.f('ix_documents_is_active'), table_name='documents')
    op.drop_index(op.f('ix_documents_parent_document_id'), table_name='documents')
    op.drop_index(op.f('ix_documents_file_type'), table_name='documents')
    op.drop_index(op.f('ix_documents_category'), table_name='documents')
    op.drop_table('documents')
    op.drop_index(op.f('ix_subadmin_permissions_is_active'), table_name='subadmin_permissions')
    op.drop_table('subadmin_permissions')
    op.drop_index(op.f('ix_profiles_role'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_email'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_username'), table_name='profiles')
    op.drop_table('profiles')
