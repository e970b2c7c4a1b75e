# backend/seed.py
import argparse
import sys
from textwrap import dedent

from blueprint.database import SessionLocal
from blueprint.main import app  # noqa: F401  creates tables
from blueprint.models import Project, Document, Version, ProjectStatus, DocumentType
from blueprint.services import project_service, versioning_service
from blueprint.utils.logging import service_logger

DEMO_PROJECTS = [
    {
        "name": "E-commerce Platform",
        "description": "A modern e-commerce platform with product catalog, shopping cart, and checkout functionality",
        "status": ProjectStatus.ACTIVE,
        "documents": [
            {
                "title": "Product Catalog",
                "document_type": DocumentType.FEATURE,
                "content": """
                    # Product Catalog Feature

                    ## Overview
                    Users should be able to browse products with filtering and search capabilities.

                    ## Requirements
                    - Display products in a grid layout
                    - Each product shows: image, name, price, rating
                    - Filter by category, price range, and rating
                    - Search by product name
                    - Sort by: price, popularity, newest
                """,
                "commits": ["Added filtering requirements", "Added search and sort functionality"],
            },
            {
                "title": "Shopping Cart",
                "document_type": DocumentType.FEATURE,
                "content": """
                    # Shopping Cart Feature

                    ## Overview
                    Users can add products to cart and manage quantities before checkout.

                    ## Requirements
                    - Add/remove products from cart
                    - Update product quantities
                    - Display cart total
                    - Persist cart across sessions
                """,
                "commits": ["Added persistence requirements"],
            },
        ],
    },
    {
        "name": "Task Management App",
        "description": "A collaborative task management application with boards, lists, and cards",
        "status": ProjectStatus.ACTIVE,
        "documents": [
            {
                "title": "Boards & Lists",
                "document_type": DocumentType.FEATURE,
                "content": """
                    # Boards and Lists

                    ## Overview
                    Organize tasks in boards with multiple lists (e.g., To Do, In Progress, Done).

                    ## Requirements
                    - Create, edit, and delete boards
                    - Each board contains multiple lists
                    - Drag and drop lists to reorder
                    - Archive boards
                """,
                "commits": ["Added board customization"],
            },
            {
                "title": "Task Cards",
                "document_type": DocumentType.FEATURE,
                "content": """
                    # Task Cards

                    ## Overview
                    Individual task cards with details, assignments, and due dates.

                    ## Requirements
                    - Create, edit, delete cards
                    - Assign members to cards
                    - Add labels, comments and attachments
                """,
                "commits": ["Added file attachments"],
            },
        ],
    },
    {
        "name": "Social Media Dashboard",
        "description": "Analytics dashboard for social media metrics and insights",
        "status": ProjectStatus.DRAFT,
        "documents": [
            {
                "title": "Analytics Overview",
                "document_type": DocumentType.PAGE,
                "content": """
                    # Analytics Dashboard

                    ## Overview
                    Display key metrics and insights from connected social media accounts.

                    ## Requirements
                    - Connect multiple social media accounts
                    - Display follower counts and growth trends
                    - Show engagement metrics
                    - Date range filters
                """,
                "commits": ["Initial analytics requirements"],
            },
            {
                "title": "Database Schema",
                "document_type": DocumentType.DATABASE,
                "content": """
                    # Database Schema

                    ### accounts
                    - id, platform, username, access_token

                    ### metrics
                    - id, account_id, date, followers_count, engagement_rate

                    ### posts
                    - id, account_id, platform_post_id, content, posted_at
                """,
                "commits": ["Added posts table"],
            },
        ],
    },
]


def reset(db) -> None:
    service_logger.info("Clearing existing data")
    db.query(Version).delete()
    db.query(Document).delete()
    db.query(Project).delete()
    db.commit()


def seed(db) -> None:
    for project_data in DEMO_PROJECTS:
        project = project_service.create_project(
            db,
            name=project_data["name"],
            description=project_data["description"],
            status=project_data["status"]
        )
        for doc_data in project_data["documents"]:
            document = versioning_service.create_document(
                db,
                project_id=project.id,
                title=doc_data["title"],
                content=dedent(doc_data["content"]).strip(),
                document_type=doc_data["document_type"]
            )
            for message in doc_data["commits"]:
                versioning_service.create_new_version(db, document.id, commit_message=message)

    service_logger.info("Seed data created", extra={
        "projects": db.query(Project).count(),
        "documents": db.query(Document).count(),
        "versions": db.query(Version).count()
    })


def main():
    parser = argparse.ArgumentParser(description="Load demo projects into the Blueprint database")
    parser.add_argument("--reset", action="store_true", help="delete existing projects first")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.reset:
            reset(db)
        seed(db)
    except Exception as e:
        db.rollback()
        print(f"Error seeding the database: {e}")
        sys.exit(1)
    finally:
        db.close()

if __name__ == "__main__":
    main()
