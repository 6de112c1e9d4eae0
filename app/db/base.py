from sqlalchemy.orm import declarative_base

Base = declarative_base()
import app.models.profile
import app.models.super_admin
import app.models.staff
import app.models.student
import app.models.drive
import app.models.application
import app.models.event
import app.models.group_mail
import app.models.coordinator
