from __future__ import annotations

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from app.postpanel.db import db_session
from app.postpanel.modules.categories.service import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
    validate_category_payload,
)
from app.postpanel.pagination import normalize_page

bp = Blueprint("categories", __name__)


@bp.get("/categories")
def categories_list():
    s = db_session()
    categories = list_categories(s, normalize_page(request.args.get("page")))
    return render_template("admin/categories/list.html", categories=categories)


@bp.get("/categories/create")
def categories_new_get():
    return render_template("admin/categories/new.html", form={"name": ""}, errors={})


@bp.post("/categories")
def categories_new_post():
    s = db_session()
    result = validate_category_payload(s, {"name": request.form.get("name")})
    if not result.ok:
        return render_template("admin/categories/new.html", form=result.data, errors=result.errors_by_field()), 422

    create_category(s, result.data)
    s.commit()

    flash("Category created", "success")
    return redirect(url_for("categories.categories_list"))


@bp.get("/categories/<int:category_id>/edit")
def category_edit_get(category_id: int):
    s = db_session()
    category = get_category(s, category_id)
    if not category:
        abort(404)
    return render_template("admin/categories/edit.html", category=category, form={"name": category.name}, errors={})


@bp.route("/categories/<int:category_id>", methods=["PUT", "PATCH"])
def category_update(category_id: int):
    s = db_session()
    category = get_category(s, category_id)
    if not category:
        abort(404)

    result = validate_category_payload(s, {"name": request.form.get("name")})
    if not result.ok:
        return render_template(
            "admin/categories/edit.html",
            category=category,
            form=result.data,
            errors=result.errors_by_field(),
        ), 422

    update_category(s, category, result.data)
    s.commit()

    flash("Category updated", "success")
    return redirect(url_for("categories.categories_list"))


@bp.delete("/categories/<int:category_id>")
def category_delete(category_id: int):
    s = db_session()
    category = get_category(s, category_id)
    if not category:
        abort(404)

    delete_category(s, category)
    s.commit()

    flash("Category deleted", "success")
    return redirect(url_for("categories.categories_list"))
