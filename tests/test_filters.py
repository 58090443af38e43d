from types import SimpleNamespace

from complaints.filters import filter_complaints, summary_counts


def complaint(title, description='', status='pending', category='other', student=None):
    profile = SimpleNamespace(full_name=student) if student else None
    return SimpleNamespace(title=title, description=description, status=status, category=category, profile=profile)


COMPLAINTS = [
    complaint('Wifi down', 'No internet in block C', 'pending', 'hostel', 'Asha Rao'),
    complaint('Exam schedule clash', 'Two papers on Monday', 'in_progress', 'academic', 'Ravi Kumar'),
    complaint('Fee receipt missing', 'Paid but no receipt', 'resolved', 'finance', 'Asha Rao'),
    complaint('Mess food', 'Cold dinner, again', 'rejected', 'hostel', 'Meera Iyer'),
    complaint('Library hours', 'Close too early', 'pending', 'academic', 'Ravi Kumar'),
]


def test_all_filters_return_everything():
    assert filter_complaints(COMPLAINTS, '', 'all', 'all') == COMPLAINTS


def test_search_is_case_insensitive_on_title_and_description():
    assert [c.title for c in filter_complaints(COMPLAINTS, 'WIFI')] == ['Wifi down']
    assert [c.title for c in filter_complaints(COMPLAINTS, 'receipt')] == ['Fee receipt missing']


def test_search_term_is_matched_untrimmed():
    assert filter_complaints(COMPLAINTS, ' down ') == []
    one_word = [complaint('Ragging', 'Seniors'), complaint('Wifi down', 'Block C')]
    assert [c.title for c in filter_complaints(one_word, ' ')] == ['Wifi down']


def test_search_ignores_student_name_unless_asked():
    assert filter_complaints(COMPLAINTS, 'ravi') == []
    matched = filter_complaints(COMPLAINTS, 'ravi', match_student_name=True)
    assert [c.title for c in matched] == ['Exam schedule clash', 'Library hours']


def test_predicates_are_anded():
    result = filter_complaints(COMPLAINTS, 'o', 'pending', 'hostel')
    assert [c.title for c in result] == ['Wifi down']


def test_status_and_category_filters_commute():
    by_status_then_category = filter_complaints(filter_complaints(COMPLAINTS, status='pending'), category='academic')
    by_category_then_status = filter_complaints(filter_complaints(COMPLAINTS, category='academic'), status='pending')
    assert by_status_then_category == by_category_then_status == [COMPLAINTS[4]]


def test_empty_values_mean_all():
    assert filter_complaints(COMPLAINTS, None, '', None) == COMPLAINTS


def test_summary_counts_use_full_set():
    counts = summary_counts(COMPLAINTS)
    assert counts == {'total': 5, 'pending': 2, 'in_progress': 1, 'resolved': 1, 'rejected': 1}


def test_summary_counts_empty():
    assert summary_counts([]) == {'total': 0, 'pending': 0, 'in_progress': 0, 'resolved': 0, 'rejected': 0}
