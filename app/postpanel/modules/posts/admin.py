from __future__ import annotations

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from app.postpanel.db import db_session
from app.postpanel.modules.categories.service import list_all_categories
from app.postpanel.modules.posts.service import (
    create_post,
    delete_post,
    get_post,
    list_posts,
    update_post,
    validate_post_payload,
)
from app.postpanel.pagination import normalize_page

bp = Blueprint("posts", __name__)


def _payload() -> dict:
    # Multi-selects post as `category_ids[]`; plain `category_ids` is accepted too.
    category_ids = request.form.getlist("category_ids[]") or request.form.getlist("category_ids")
    return {
        "name": request.form.get("name"),
        "category_ids": category_ids,
    }


# ---------- List ----------
@bp.get("/posts")
def posts_list():
    s = db_session()
    posts = list_posts(s, normalize_page(request.args.get("page")))
    return render_template("admin/posts/list.html", posts=posts)


# ---------- New ----------
@bp.get("/posts/create")
def posts_new_get():
    s = db_session()
    return render_template(
        "admin/posts/new.html",
        categories=list_all_categories(s),
        form={"name": "", "category_ids": []},
        errors={},
    )


@bp.post("/posts")
def posts_new_post():
    s = db_session()

    result = validate_post_payload(s, _payload())
    if not result.ok:
        return render_template(
            "admin/posts/new.html",
            categories=list_all_categories(s),
            form=result.data,
            errors=result.errors_by_field(),
        ), 422

    create_post(s, result.data)
    s.commit()

    flash("Post created", "success")
    return redirect(url_for("posts.posts_list"))


# ---------- Edit ----------
@bp.get("/posts/<int:post_id>/edit")
def post_edit_get(post_id: int):
    s = db_session()
    post = get_post(s, post_id)
    if not post:
        abort(404)
    return render_template(
        "admin/posts/edit.html",
        post=post,
        categories=list_all_categories(s),
        form={"name": post.name, "category_ids": post.category_ids},
        errors={},
    )


@bp.route("/posts/<int:post_id>", methods=["PUT", "PATCH"])
def post_update(post_id: int):
    s = db_session()
    post = get_post(s, post_id)
    if not post:
        abort(404)

    result = validate_post_payload(s, _payload())
    if not result.ok:
        return render_template(
            "admin/posts/edit.html",
            post=post,
            categories=list_all_categories(s),
            form=result.data,
            errors=result.errors_by_field(),
        ), 422

    update_post(s, post, result.data)
    s.commit()

    flash("Post updated", "success")
    return redirect(url_for("posts.posts_list"))


# ---------- Delete ----------
@bp.delete("/posts/<int:post_id>")
def post_delete(post_id: int):
    s = db_session()
    post = get_post(s, post_id)
    if not post:
        abort(404)

    delete_post(s, post)
    s.commit()

    flash("Post deleted", "success")
    return redirect(url_for("posts.posts_list"))
