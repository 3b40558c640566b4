"""Initial migration - create all tables

Revision ID: 001_initial
Revises: None
Create Date: 2023-02-11

Creates all database tables for the SLAT attendance API:
- students: Students with matric numbers and access codes
- lecturers: Lecturers with access codes
- courses: Courses with credit units
- lectures: Lectures of a course, delivered by a lecturer
- lecturer_courses: Lecturer-to-course assignments
- student_courses: Student course registrations
- attendees: Student attendance marks on lectures

Join tables carry unique constraints on their pairs.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Students Table ────────────────────────────────────────
    op.create_table(
        'students',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('matric_no', sa.String(64), nullable=False, unique=True),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('photo', sa.Text(), nullable=True),
        sa.Column('access_code', sa.Integer(), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )

    # ── Lecturers Table ───────────────────────────────────────
    op.create_table(
        'lecturers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('photo', sa.Text(), nullable=True),
        sa.Column('access_code', sa.Integer(), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )

    # ── Courses Table ─────────────────────────────────────────
    op.create_table(
        'courses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('code', sa.String(32), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('unit', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )

    # ── Lectures Table ────────────────────────────────────────
    op.create_table(
        'lectures',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('course_id', sa.String(36),
                  sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('lecturer_id', sa.String(36),
                  sa.ForeignKey('lecturers.id'), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_lectures_course_id', 'lectures', ['course_id'])
    op.create_index('ix_lectures_lecturer_id', 'lectures', ['lecturer_id'])

    # ── Join Tables ───────────────────────────────────────────
    op.create_table(
        'lecturer_courses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('lecturer_id', sa.String(36),
                  sa.ForeignKey('lecturers.id'), nullable=False),
        sa.Column('course_id', sa.String(36),
                  sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('lecturer_id', 'course_id', name='uq_lecturer_courses_pair'),
    )
    op.create_index('ix_lecturer_courses_lecturer_id', 'lecturer_courses', ['lecturer_id'])
    op.create_index('ix_lecturer_courses_course_id', 'lecturer_courses', ['course_id'])

    op.create_table(
        'student_courses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('student_id', sa.String(36),
                  sa.ForeignKey('students.id'), nullable=False),
        sa.Column('course_id', sa.String(36),
                  sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'course_id', name='uq_student_courses_pair'),
    )
    op.create_index('ix_student_courses_student_id', 'student_courses', ['student_id'])
    op.create_index('ix_student_courses_course_id', 'student_courses', ['course_id'])

    op.create_table(
        'attendees',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('student_id', sa.String(36),
                  sa.ForeignKey('students.id'), nullable=False),
        sa.Column('lecture_id', sa.String(36),
                  sa.ForeignKey('lectures.id'), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'lecture_id', name='uq_attendees_student_lecture'),
    )
    op.create_index('ix_attendees_student_id', 'attendees', ['student_id'])
    op.create_index('ix_attendees_lecture_id', 'attendees', ['lecture_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index('ix_attendees_lecture_id', table_name='attendees')
    op.drop_index('ix_attendees_student_id', table_name='attendees')
    op.drop_table('attendees')
    op.drop_index('ix_student_courses_course_id', table_name='student_courses')
    op.drop_index('ix_student_courses_student_id', table_name='student_courses')
    op.drop_table('student_courses')
    op.drop_index('ix_lecturer_courses_course_id', table_name='lecturer_courses')
    op.drop_index('ix_lecturer_courses_lecturer_id', table_name='lecturer_courses')
    op.drop_table('lecturer_courses')
    op.drop_index('ix_lectures_lecturer_id', table_name='lectures')
    op.drop_index('ix_lectures_course_id', table_name='lectures')
    op.drop_table('lectures')
    op.drop_table('courses')
    op.drop_table('lecturers')
    op.drop_table('students')
