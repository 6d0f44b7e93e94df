from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np

from .data import SKELETON_CONNECTIONS, CapturedSkeleton


def project_to_frame(
    point: np.ndarray, origin: Tuple[int, int], scale: float, mirror: bool = False
) -> Tuple[int, int]:
    """y-up の 3D 座標を画像座標 (x, y) に正射影する。

    mirror=True のときは左右反転した画像に合わせて x を反転する。
    """
    lateral = -point[0] if mirror else point[0]
    x = origin[0] + lateral * scale
    y = origin[1] - point[1] * scale
    return int(round(x)), int(round(y))


def draw_skeleton_on_frame(
    frame: np.ndarray,
    skeleton: Optional[CapturedSkeleton],
    origin: Optional[Tuple[int, int]] = None,
    scale: float = 200.0,
    mirror: bool = False,
) -> None:
    """フレーム上に骨格を描画する補助関数。

    引数:
            frame: BGR 画像（描画はこの配列に行われる）
            skeleton: CapturedSkeleton インスタンス
            origin: 骨格原点を置く画像座標。省略時は画像中央
            scale: 1 単位あたりのピクセル数
            mirror: 左右反転したプレビューに描く場合は True

    返り値: なし（frame がインプレースで変更される）
    """
    if skeleton is None:
        return

    if origin is None:
        height, width = frame.shape[:2]
        origin = (width // 2, height // 2)

    for joint_a, joint_b in SKELETON_CONNECTIONS:
        if joint_a in skeleton and joint_b in skeleton:
            p1 = project_to_frame(skeleton[joint_a], origin, scale, mirror)
            p2 = project_to_frame(skeleton[joint_b], origin, scale, mirror)
            cv2.line(frame, p1, p2, (255, 0, 0), 2)
    for position in skeleton.positions.values():
        cv2.circle(frame, project_to_frame(position, origin, scale, mirror), 5, (0, 200, 0), -1)


def draw_status_on_frame(
    frame: np.ndarray,
    frame_count: int,
    recording: bool,
    location: Tuple[int, int] = (10, 40),
) -> None:
    """録画状態とフレーム数を描画する補助関数。"""
    x, y = location
    if recording:
        text = f"REC {frame_count} frames"
        color = (0, 0, 220)
    else:
        text = f"{frame_count} frames"
        color = (0, 200, 0)

    cv2.putText(
        frame, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 1.2, color, 3, cv2.LINE_AA
    )
