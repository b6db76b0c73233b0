"""Streamlit Media Manager for CineMedia."""

from __future__ import annotations

import requests
import streamlit as st

from CineMedia import token_store
from CineMedia.capacity import (
    CapacityError,
    capacity_label,
    check_move_target,
    is_full,
    plan_upload,
)
from CineMedia.config import ConfigError, Settings, load_settings
from CineMedia.folder_index import create_folder_id_map
from CineMedia.media_api import FileTooLargeError, MediaApiClient, MediaApiError
from CineMedia.models import ROOT, TreeNode
from CineMedia.node_locator import (
    breadcrumbs,
    current_folder_name,
    is_root_path,
    locate,
    normalize_path,
    walk_paths,
)
from CineMedia.tree_builder import audit_tree, build_tree
from CineMedia.tree_renderer import render_tree


_PATH_KEY = "folder_path"
SETTINGS_LABEL = "⚙️ Settings"


def _set_path(path: list[str]) -> None:
    st.session_state[_PATH_KEY] = normalize_path(path)


def _path_label(path: list[str]) -> str:
    parts = normalize_path(path)
    return "Root" if parts == [ROOT] else " / ".join(parts[1:])


def main() -> None:
    st.set_page_config(
        page_title="CineMedia",
        page_icon="🎬",
        layout="wide",
    )

    try:
        settings = load_settings()
    except ConfigError as exc:
        st.error(f"Invalid configuration: {exc}")
        return

    # --- Header with settings popover ---
    header_left, header_right = st.columns([8, 1])
    with header_left:
        st.title("Media Manager")
    with header_right:
        with st.popover(SETTINGS_LABEL, use_container_width=True):
            st.subheader("Settings")
            st.caption(f"Backend: {settings.api_url}")
            saved = token_store.load(settings.api_url) or ""
            token = st.text_input("Access token", value=saved, type="password")
            if token_store.is_available():
                remember = st.checkbox(
                    "Save token to OS keychain for this backend",
                    value=bool(saved),
                )
                if remember and token:
                    token_store.save(settings.api_url, token)
                elif not remember and saved:
                    token_store.delete(settings.api_url)

    client = MediaApiClient(
        api_url=settings.api_url,
        token=token.strip() or None,
        image_endpoint=settings.image_endpoint,
        timeout=settings.timeout,
    )

    try:
        with st.spinner("Loading folders..."):
            images, folders = client.fetch_snapshot()
    except (MediaApiError, requests.RequestException) as exc:
        st.error(f"Failed to load media library: {exc}")
        return

    # Rebuilt from the fresh snapshot on every run
    tree = build_tree(images, folders)
    audit = audit_tree(images, folders)
    if not audit.is_clean:
        with st.expander("⚠ Library inconsistencies", expanded=False):
            for name in audit.orphan_folders:
                st.text(f"Folder not reachable from root: {name}")
            for name in audit.unknown_image_folders:
                st.text(f"Images tagged with unknown folder: {name}")

    folder_ids = create_folder_id_map(folders)
    path = normalize_path(st.session_state.get(_PATH_KEY))

    left, right = st.columns([1, 3])
    with left:
        _folder_panel(client, tree, folder_ids, path, settings)
    with right:
        _breadcrumb_bar(path)
        _uploader(client, tree, path, settings)
        _image_grid(client, tree, path, settings)


def _folder_panel(
    client: MediaApiClient,
    tree: TreeNode,
    folder_ids: dict[str, int],
    path: list[str],
    settings: Settings,
) -> None:
    st.subheader("Folders")
    limit = settings.max_images_per_folder

    for folder_path in walk_paths(tree):
        depth = len(folder_path) - 1
        name = folder_path[-1]
        label = f"{'  ' * depth}{'Root' if folder_path == [ROOT] else name}"
        badge = capacity_label(tree, folder_path, limit)
        selected = folder_path == path
        if st.button(
            f"{label} · {badge}",
            key=f"folder:{'/'.join(folder_path)}",
            type="primary" if selected else "secondary",
            use_container_width=True,
        ):
            _set_path(folder_path)
            st.rerun()

    with st.expander("Tree preview", expanded=False):
        st.code(render_tree(tree, limit), language="text")

    new_name = st.text_input("New folder name")
    if st.button("Create folder", disabled=not new_name.strip()):
        parent = None if is_root_path(path) else folder_ids.get(current_folder_name(path))
        try:
            client.create_folder(new_name.strip(), parent_id=parent)
        except (MediaApiError, requests.RequestException) as exc:
            st.error(f"Create failed: {exc}")
        else:
            st.rerun()

    if not is_root_path(path):
        name = current_folder_name(path)
        folder_id = folder_ids.get(name)
        if folder_id and st.button(f'Delete folder "{name}"', type="secondary"):
            try:
                client.delete_folder(folder_id, delete_items=False)
            except (MediaApiError, requests.RequestException) as exc:
                st.error(f"Delete failed: {exc}")
            else:
                st.toast(f'Folder "{name}" deleted and images moved to root.')
                _set_path([ROOT])
                st.rerun()


def _breadcrumb_bar(path: list[str]) -> None:
    crumbs = breadcrumbs(path)
    cols = st.columns(len(crumbs))
    for col, (label, target) in zip(cols, crumbs):
        with col:
            if st.button(label, key=f"crumb:{'/'.join(target)}", disabled=target == path):
                _set_path(target)
                st.rerun()


def _uploader(
    client: MediaApiClient,
    tree: TreeNode,
    path: list[str],
    settings: Settings,
) -> None:
    limit = settings.max_images_per_folder
    folder = current_folder_name(path)

    if is_full(tree, path, limit):
        st.info(f'Folder "{folder}" is full ({limit} images).')
        return

    files = st.file_uploader(
        "Upload images", type=None, accept_multiple_files=True, key=f"upload:{folder}"
    )
    if not files or not st.button("Upload", type="primary"):
        return

    plan = plan_upload(tree, path, [f.name for f in files], limit)
    if plan.rejected:
        st.warning(
            f"Limit reached: skipping {len(plan.rejected)} file(s). "
            f"Folder can hold {limit} images."
        )

    progress = st.progress(0.0, text="Uploading...")
    errors: list[str] = []
    accepted = files[: len(plan.accepted)]
    for i, upload in enumerate(accepted, start=1):
        name = upload.name
        try:
            client.upload_image(
                name,
                upload.getvalue(),
                folder_name=folder,
                content_type=upload.type or "application/octet-stream",
            )
        except FileTooLargeError as exc:
            errors.append(str(exc))
        except (MediaApiError, requests.RequestException) as exc:
            errors.append(f"{name}: {exc}")
        progress.progress(i / len(accepted), text=f"Uploading: {name}")

    if plan.accepted and not errors and not plan.rejected:
        st.rerun()
    for err in errors:
        st.error(err)


def _image_grid(
    client: MediaApiClient,
    tree: TreeNode,
    path: list[str],
    settings: Settings,
) -> None:
    node = locate(tree, path)
    images = node.items or []
    if not images:
        st.caption("No images here.")
        return

    selected: list[int] = []
    cols = st.columns(4)
    for i, img in enumerate(images):
        with cols[i % 4]:
            if img.url:
                st.image(img.url, caption=img.name, use_container_width=True)
            if st.checkbox("Select", key=f"img:{img.id}"):
                selected.append(img.id)

    if not selected:
        return

    targets = [p for p in walk_paths(tree) if p != path]
    target = st.selectbox("Move to", targets, format_func=_path_label)
    move_col, delete_col = st.columns(2)

    with move_col:
        if st.button(f"Move {len(selected)} image(s)") and target:
            try:
                check_move_target(tree, target, len(selected), settings.max_images_per_folder)
                client.move_images(selected, current_folder_name(target))
            except CapacityError as exc:
                st.error(str(exc))
            except (MediaApiError, requests.RequestException) as exc:
                st.error(f"Move failed: {exc}")
            else:
                st.rerun()

    with delete_col:
        if st.button(f"Delete {len(selected)} image(s)", type="primary"):
            try:
                for image_id in selected:
                    client.delete_image(image_id)
            except (MediaApiError, requests.RequestException) as exc:
                st.error(f"Delete failed: {exc}")
            else:
                st.rerun()


if __name__ == "__main__":
    main()
