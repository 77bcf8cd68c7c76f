"""
Create (or reset the password of) a back-office user
Usage: python scripts/create_user.py <username> <password> [admin]
"""
import sys
import os
sys.path.append(os.getcwd())

from mugshop.core import SessionLocal, Base, engine
from mugshop.models import AppUser
from mugshop.api.auth import get_password_hash

def create_user(username: str, password: str, role: str = "user"):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = db.query(AppUser).filter(AppUser.username == username).first()
        if user:
            user.hashed_password = get_password_hash(password)
            user.role = role
            print(f"Updated user {username}")
        else:
            user = AppUser(username=username, hashed_password=get_password_hash(password), role=role)
            db.add(user)
            print(f"Created user {username}")
        db.commit()
        print(f"USER_ID: {user.id}")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    create_user(sys.argv[1], sys.argv[2], "admin" if len(sys.argv) > 3 and sys.argv[3] == "admin" else "user")
