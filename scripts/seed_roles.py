"""Utility script to create the system roles and an initial administrator."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from bechapra.domain.entities import ROLE_ADMIN_GENERAL, ROLE_ALIASES, ROLE_LABELS
from bechapra.infrastructure.database import SessionLocal, initialize_database
from bechapra.infrastructure.models import RoleModel, UserModel
from bechapra.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed."""

    parser = argparse.ArgumentParser(
        description="Create the roles and an initial administrator for Bechapra.",
    )
    parser.add_argument(
        "--name",
        default="Administrador",
        help="Nombre completo del administrador (por defecto: Administrador)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Correo electrónico del administrador (por defecto: admin@example.com)",
    )
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Muestra un token de acceso para el administrador.",
    )
    return parser.parse_args()


def main() -> None:
    """Insert the missing roles and the administrator."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        roles = {role.alias: role for role in session.query(RoleModel).all()}
        for alias in ROLE_ALIASES:
            if alias not in roles:
                roles[alias] = RoleModel(name=ROLE_LABELS[alias], alias=alias)
                session.add(roles[alias])
        session.flush()

        admin = session.query(UserModel).filter(UserModel.email == args.email).first()
        if admin is None:
            admin = UserModel(
                role_id=roles[ROLE_ADMIN_GENERAL].id,
                name=args.name,
                email=args.email,
                is_active=True,
            )
            session.add(admin)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar los datos iniciales: {exc}") from exc
    else:
        print(
            "Datos iniciales listos:\n"
            f"  Roles: {', '.join(ROLE_ALIASES)}\n"
            f"  Administrador: {admin.name} <{admin.email}> (ID {admin.id})"
        )
        if args.print_token:
            print(f"  Token: {create_access_token(admin.id)}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
