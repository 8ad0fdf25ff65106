"""
Centralized Japanese UI messages.
All user-facing text in Japanese for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'ログインしました',
    'logout_success': 'ログアウトしました',
    'slot_saved': 'レッスン枠を保存しました',
    'slot_deleted': 'レッスン枠を削除しました',
    'package_saved': 'パッケージを保存しました',
    'package_deleted': 'パッケージを削除しました',
    'settings_saved': '設定を保存しました',
    'force_cancel_done': 'キャンセル処理が完了しました。\nキャンセル待ちの繰り上げがあれば自動処理されました。',

    # Error messages
    'invalid_credentials': 'パスワードが違います',
    'login_required': 'ログインしてください',
    'session_expired': '認証セッションが切れました。再ログインしてください。',
    'permission_denied': 'この操作は許可されていません',
    'not_found': '見つかりません',
    'server_error': 'サーバーエラーが発生しました',
    'backend_error': 'エラーが発生しました: {error}',
    'init_failed': '初期データの取得に失敗しました: {error}',
    'date_not_selected': 'まずは日付を選択してください',
    'past_date': '過去の日付には登録できません',
    'invalid_date': '日付の形式が正しくありません (YYYY-MM-DD)',
    'invalid_month': '年月の指定が正しくありません',
    'time_required': '時間を入力してください',
    'invalid_time': '時間の形式が正しくありません (HH:MM)',
    'lesson_name_required': 'レッスン名を入力してください',
    'price_locked': '予約者がいるため料金は変更できません',
    'slot_delete_locked': '予約者がいるため削除できません。先にすべての予約を強制キャンセルしてください。',
    'slot_delete_confirm': 'このレッスン枠を削除しますか？',
    'slot_not_found': 'レッスン枠が見つかりません',
    'package_not_found': 'パッケージが見つかりません',
    'guest_not_found': '予約が見つかりません',
    'reservation_id_missing': '予約IDが不明です',
    'invalid_email': 'メールアドレスの形式が正しくありません',
    'invalid_color': '色の形式が正しくありません',
    'data_required': 'データが必要です',
    'capacity_unresolved': '定員が設定されていないレッスン枠があります',

    # Info messages
    'no_slots': 'レッスンの登録はありません',
    'no_guests': '予約者はまだいません',
    'no_history': '履歴なし',
    'no_customers': '該当する顧客はいません',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
