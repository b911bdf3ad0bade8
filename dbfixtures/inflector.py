"""
Naming conventions between table names and entity-type names.

people -> Person, web_sites -> WebSite, and back again via underscore().
"""

import inflection


def singularize(word: str) -> str:
    return inflection.singularize(word)


def classify(table_name: str) -> str:
    """Entity-type name for a table: singularized, CamelCased."""
    # schema-qualified names classify on the bare table
    table_name = table_name.rsplit(".", 1)[-1]
    return inflection.camelize(singularize(table_name))


def underscore(class_name: str) -> str:
    return inflection.underscore(class_name)
